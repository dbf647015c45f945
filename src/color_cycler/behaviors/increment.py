"""
Increment Behavior

Advances hue by a fixed number of degrees on every cycle.
"""

from color_cycler.behaviors.base import BaseBehavior
from color_cycler.models.color import HSLColor
from color_cycler.models.domain.context import ContextSettings
from color_cycler.models.enums import BehaviorKind


class IncrementBehavior(BaseBehavior):
    """
    Increment - hue is additive, saturation/lightness are static

    next = {h: current.h + degrees, s: saturation, l: lightness}

    Saturation and lightness are reset to the configured values every
    cycle (not carried over from the current color). The result is not
    wrapped here; the cycle engine normalizes it (350 + 30 -> 20).
    """
    KIND = BehaviorKind.INCREMENT

    def next_color(self, current: HSLColor, context: ContextSettings) -> HSLColor:
        params = context.increment
        return HSLColor(
            h=current.h + params.degrees,
            s=params.saturation,
            l=params.lightness,
        )
