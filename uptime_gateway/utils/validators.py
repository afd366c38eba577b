from __future__ import annotations

from typing import Any


def to_native_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    try:
        casted = float(value)
        if casted != casted:
            return default
        return casted
    except (TypeError, ValueError):
        return default


def to_native_int(value: Any, default: int = 0) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def to_percent(value: Any) -> float:
    """Clamp an uptime ratio string like ``"99.987"`` to two decimals in [0, 100]."""
    return round(min(max(to_native_float(value), 0.0), 100.0), 2)
