from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Literal, Optional

from .errors import InvalidConfigError

WeightPolicyName = Literal["mean", "threshold"]

DEFAULT_EPSILON = 0.0001


@dataclass(frozen=True)
class LidConfig:
    """
    Stable, SDK-first configuration for classification and training.

    The CLI should map flags -> this object; the SDK should accept this object directly.
    """

    # Minimum winning score; anything at or below means "no winner".
    epsilon: float = DEFAULT_EPSILON

    # Weight convergence strategy applied to induction words of the winning language.
    weight_policy: WeightPolicyName = "mean"
    # Only used by the "threshold" policy: adjust when a sentence has more tokens than this.
    adjust_min_tokens: int = 6

    # Whitespace-segmented languages drop tokens shorter than this.
    min_word_length: int = 1

    # Share of a labeled batch ingested as axioms; the rest is held out for validation.
    axiom_ratio: float = 0.9

    # Shuffle seed for batch ingestion. None => nondeterministic.
    seed: Optional[int] = None

    # Serialization schema version for backwards-compatible config dicts.
    # NOTE: keep this field last to avoid breaking positional construction.
    schema_version: int = 1

    def normalized(self) -> "LidConfig":
        """Return a defensively normalized config (types/constraints)."""

        epsilon = float(self.epsilon)
        if not (epsilon >= 0.0):
            raise InvalidConfigError("epsilon must be >= 0.0")
        if self.weight_policy not in ("mean", "threshold"):
            raise InvalidConfigError("weight_policy must be one of: mean, threshold")
        axiom_ratio = float(self.axiom_ratio)
        if not (0.0 <= axiom_ratio <= 1.0):
            raise InvalidConfigError("axiom_ratio must be in [0.0, 1.0]")

        seed = None if self.seed is None else int(self.seed)
        return LidConfig(
            epsilon=epsilon,
            weight_policy=self.weight_policy,
            adjust_min_tokens=max(0, int(self.adjust_min_tokens)),
            min_word_length=max(1, int(self.min_word_length)),
            axiom_ratio=axiom_ratio,
            seed=seed,
            schema_version=max(1, int(self.schema_version)),
        )

    def to_dict(self) -> dict[str, object]:
        return dict(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, object], *, strict: bool = False) -> "LidConfig":
        """
        Load a config from a JSON-friendly dict.

        Backward compatibility policy:
          - Older dicts without `schema_version` are accepted.
          - Unknown keys are ignored by default (strict=False).
          - Values are coerced conservatively (e.g., "1" -> 1) where safe.
        """

        if not isinstance(data, dict):
            raise InvalidConfigError("config must be a dict")

        allowed = {f.name for f in fields(cls)}
        unknown = sorted([k for k in data.keys() if k not in allowed])
        if unknown and strict:
            raise InvalidConfigError(f"Unknown config keys: {', '.join(unknown)}")

        def as_int(v: Any, *, default: int) -> int:
            if v is None:
                return int(default)
            try:
                return int(v)
            except Exception:
                return int(default)

        def as_float(v: Any, *, default: float) -> float:
            if v is None:
                return float(default)
            try:
                return float(v)
            except Exception:
                return float(default)

        kwargs: dict[str, Any] = {}
        if "epsilon" in data:
            kwargs["epsilon"] = as_float(data.get("epsilon"), default=DEFAULT_EPSILON)
        if "weight_policy" in data:
            kwargs["weight_policy"] = str(data.get("weight_policy") or "").strip().lower() or "mean"
        if "adjust_min_tokens" in data:
            kwargs["adjust_min_tokens"] = as_int(data.get("adjust_min_tokens"), default=6)
        if "min_word_length" in data:
            kwargs["min_word_length"] = as_int(data.get("min_word_length"), default=1)
        if "axiom_ratio" in data:
            kwargs["axiom_ratio"] = as_float(data.get("axiom_ratio"), default=0.9)
        if "seed" in data:
            v = data.get("seed")
            kwargs["seed"] = None if v is None else as_int(v, default=0)

        # v1: schema_version introduced. Older dicts may not have it.
        kwargs["schema_version"] = as_int(data.get("schema_version"), default=1)

        return cls(**kwargs).normalized()
