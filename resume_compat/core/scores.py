from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round halves upward (72.5 -> 73); the builtin round() rounds halves to even."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: float = 0, high: float = 100) -> int:
    return round_half_up(max(low, min(high, value)))
