from __future__ import annotations

import os
import platform
import sys
from importlib import metadata
from pathlib import Path
from typing import Optional

from .languages import Language, Segmentation, get_language_profile


def _dist_version(dist_name: str) -> Optional[str]:
    try:
        return metadata.version(dist_name)
    except metadata.PackageNotFoundError:
        return None
    except Exception:
        return None


def _module_importable(module_name: str) -> bool:
    try:
        __import__(module_name)
        return True
    except Exception:
        return False


def collect_doctor_info() -> dict[str, object]:
    """
    Collect a best-effort environment report for `vlid doctor`.

    This should stay lightweight and side-effect free (no network, no dataset loading).
    """

    # Dist names (PyPI) may differ from import names.
    dists: dict[str, str] = {
        # Core
        "regex": "regex",
        "typer": "typer",
        "rich": "rich",
        # Optional features
        "fastapi": "fastapi",
        "pydantic": "pydantic",
        "httpx": "httpx",
        "pytest": "pytest",
    }

    packages: dict[str, dict[str, object]] = {}
    for name, dist in dists.items():
        v = _dist_version(dist)
        packages[name] = {"installed": v is not None, "version": v}

    dataset_env = os.getenv("VLID_DATASET_PATH")
    dataset_present = bool(dataset_env) and Path(str(dataset_env)).expanduser().is_file()

    return {
        "python": {"version": sys.version.split()[0], "executable": sys.executable},
        "platform": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "features": {
            "n_languages": len(Language),
            "character_segmented": [
                lang.value
                for lang in Language
                if get_language_profile(lang).segmentation == Segmentation.CHARACTER
            ],
            "api_service_importable": _module_importable("fastapi"),
            "dataset_env": dataset_env,
            "dataset_present": dataset_present,
        },
        "packages": packages,
    }
