"""
Random Behavior

Each channel is drawn uniformly at random or pinned to a fixed value.
"""

import math
import random
from typing import Optional

from color_cycler.behaviors.base import BaseBehavior
from color_cycler.models.color import HSLColor
from color_cycler.models.domain.behavior import ChannelSetting
from color_cycler.models.domain.context import ContextSettings
from color_cycler.models.enums import BehaviorKind

HUE_SPAN = 360
PERCENT_SPAN = 100


class RandomBehavior(BaseBehavior):
    """
    Random - independent per-channel sampling

    Random channels are floor(uniform * span): hue in [0, 360),
    saturation/lightness in [0, 100) (100 itself is never drawn).

    Args:
        rng: Random source (default: a fresh random.Random). Pass a seeded
             random.Random for reproducible sequences.
    """
    KIND = BehaviorKind.RANDOM

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _sample(self, channel: ChannelSetting, span: int) -> int:
        if not channel.is_random:
            return channel.fixed_value
        return math.floor(self.rng.random() * span)

    def next_color(self, current: HSLColor, context: ContextSettings) -> HSLColor:
        params = context.random
        return HSLColor(
            h=self._sample(params.hue, HUE_SPAN),
            s=self._sample(params.saturation, PERCENT_SPAN),
            l=self._sample(params.lightness, PERCENT_SPAN),
        )
