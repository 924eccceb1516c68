from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_REFERENCE_DATA_CACHE: dict[str, Any] | None = None
_REFERENCE_DATA_PATH = Path(__file__).resolve().with_name("reference_data.yaml")


def get_reference_data() -> dict[str, Any]:
    """Load lookup tables from app/core/reference_data.yaml and cache them."""
    global _REFERENCE_DATA_CACHE

    if _REFERENCE_DATA_CACHE is not None:
        return _REFERENCE_DATA_CACHE

    if not _REFERENCE_DATA_PATH.exists():
        raise RuntimeError(
            f"Reference data not found at '{_REFERENCE_DATA_PATH}'. "
            "Expected file: app/core/reference_data.yaml"
        )

    try:
        raw = _REFERENCE_DATA_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read reference data '{_REFERENCE_DATA_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in reference data '{_REFERENCE_DATA_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid reference data '{_REFERENCE_DATA_PATH}': expected a top-level mapping."
        )

    _REFERENCE_DATA_CACHE = parsed
    return _REFERENCE_DATA_CACHE


def get_reference_value(path: str, default: Any = None) -> Any:
    """Get nested value using dot path notation, e.g. 'salary.seniority.entry_pattern'."""
    if not path:
        return default

    current: Any = get_reference_data()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current
