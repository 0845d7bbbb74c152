from __future__ import annotations

from typing import Any, Callable, Optional

EventHook = Callable[[dict[str, Any]], None]


def emit(hook: Optional[EventHook], event: dict[str, Any]) -> None:
    """Deliver a JSON-friendly progress event to an optional hook."""
    if hook is None:
        return
    try:
        hook(event)
    except Exception:
        # Logging must never break classification or training.
        return
