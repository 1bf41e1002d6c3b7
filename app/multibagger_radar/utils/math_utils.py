from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def normalize(value: float, low: float, high: float) -> float:
    """Min-max scale ``value`` into [0, 1]; a degenerate range maps to 0.5."""
    if high == low:
        return 0.5
    return clamp((value - low) / (high - low), 0.0, 1.0)


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` instead of raising or yielding inf/nan."""
    if denominator == 0:
        return default
    result = numerator / denominator
    if not math.isfinite(result):
        return default
    return result
