"""
Range parameter definitions

Stateless descriptions of every numeric setting: label, bounds, default.
The configuration boundary and the settings loader both clamp through
these so a value can never be stored out of range.
"""

from typing import Any

from color_cycler.utils.colors import clamp_int


class IntRangeParam:
    """Integer parameter with min/max - stateless definition."""

    def __init__(
        self,
        *,
        label: str,
        min_value: int,
        max_value: int,
        default: int,
    ):
        self.label = label
        self.min = min_value
        self.max = max_value
        self.default = default

    def clamp(self, value: Any) -> int:
        """Clamp to [min, max]; unparseable input lands on min"""
        return clamp_int(value, self.min, self.max)

    def __repr__(self) -> str:
        return f"IntRangeParam({self.label!r}, {self.min}..{self.max})"


START_ANGLE = IntRangeParam(label="Starting hue angle", min_value=0, max_value=360, default=0)
HUE_DEGREES = IntRangeParam(label="Hue degrees", min_value=1, max_value=360, default=30)
HUE = IntRangeParam(label="Hue angle", min_value=0, max_value=360, default=0)
SATURATION = IntRangeParam(label="Saturation", min_value=0, max_value=100, default=100)
LIGHTNESS = IntRangeParam(label="Lightness", min_value=0, max_value=100, default=50)
TIMER_SECONDS = IntRangeParam(label="Timer", min_value=1, max_value=86400, default=60)
