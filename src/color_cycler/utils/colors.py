"""
Color value utilities

Pure functions that clamp/wrap raw numeric input into valid HSL channel
ranges. Non-finite input (NaN, +/-inf, unparseable text) always lands on the
lower bound of the range, so these functions are total.
"""

import math
from typing import Any

from color_cycler.models.color import HSLColor

HUE_RANGE = 360
CHANNEL_MAX = 100


def coerce_number(value: Any) -> float:
    """
    Convert loosely typed input to float

    Accepts int/float and numeric strings (older settings files stored
    numbers as text). Booleans, None and anything unparseable become NaN.

    Example:
        coerce_number("45")   # 45.0
        coerce_number(" 7 ")  # 7.0
        coerce_number("abc")  # nan
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def clamp(value: Any, lo: float, hi: float) -> float:
    """
    Clamp value to [lo, hi]; non-finite input maps to lo

    Example:
        clamp(120, 0, 100)         # 100
        clamp(float("nan"), 0, 100)  # 0
    """
    number = coerce_number(value)
    if not math.isfinite(number):
        return lo
    return max(lo, min(hi, number))


def clamp_int(value: Any, lo: int, hi: int) -> int:
    """Clamp to [lo, hi] and truncate toward zero (parseInt semantics)"""
    return int(clamp(value, lo, hi))


def wrap_hue(value: Any) -> float:
    """
    Wrap hue into [0, 360) using true modulo (never negative)

    Example:
        wrap_hue(380)  # 20
        wrap_hue(-30)  # 330
    """
    number = coerce_number(value)
    if not math.isfinite(number):
        return 0
    # second modulo folds float results like -1e-20 % 360 == 360.0 back to 0
    return _tidy(((number % HUE_RANGE) + HUE_RANGE) % HUE_RANGE)


def _tidy(number: float):
    """Return ints for whole numbers so status text reads 'HSL 20 100 50'"""
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def normalize(raw: HSLColor) -> HSLColor:
    """
    Bound a raw color into valid channel ranges

    h wraps modulo 360; s and l clamp to [0, 100]. Idempotent:
    normalize(normalize(c)) == normalize(c).

    Args:
        raw: Color with possibly out-of-range or non-finite channels

    Returns:
        New HSLColor with h in [0, 360), s and l in [0, 100]
    """
    return HSLColor(
        h=wrap_hue(raw.h),
        s=_tidy(clamp(raw.s, 0, CHANNEL_MAX)),
        l=_tidy(clamp(raw.l, 0, CHANNEL_MAX)),
    )
