"""
Preset Behavior

Steps through the user's preset color list, wrapping at the end.
"""

from color_cycler.behaviors.base import BaseBehavior
from color_cycler.models.color import HSLColor
from color_cycler.models.domain.context import ContextSettings
from color_cycler.models.enums import BehaviorKind


class PresetBehavior(BaseBehavior):
    """
    Preset - advance current index (mod list length), return that entry

    Mutates context.preset.current_index. An empty list (should not happen,
    the settings layer keeps at least one entry) leaves the color unchanged.
    """
    KIND = BehaviorKind.PRESET

    def next_color(self, current: HSLColor, context: ContextSettings) -> HSLColor:
        color = context.preset.advance()
        return color if color is not None else current
