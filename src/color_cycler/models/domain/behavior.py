"""Per-behavior parameter models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from color_cycler.models.color import HSLColor
from color_cycler.models import params


@dataclass
class IncrementParams:
    """
    Increment behavior parameters

    start_angle seeds the color once, when the behavior is (re)selected or
    one of these values changes. Each cycle adds `degrees` to the current
    hue and resets saturation/lightness to the static values.
    """
    start_angle: int = params.START_ANGLE.default
    degrees: int = params.HUE_DEGREES.default
    saturation: int = params.SATURATION.default
    lightness: int = params.LIGHTNESS.default

    def initial_color(self) -> HSLColor:
        return HSLColor(h=self.start_angle, s=self.saturation, l=self.lightness)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startAngle": self.start_angle,
            "degrees": self.degrees,
            "saturation": self.saturation,
            "lightness": self.lightness,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IncrementParams':
        return cls(
            start_angle=params.START_ANGLE.clamp(data.get("startAngle", params.START_ANGLE.default)),
            degrees=params.HUE_DEGREES.clamp(data.get("degrees", params.HUE_DEGREES.default)),
            saturation=params.SATURATION.clamp(data.get("saturation", params.SATURATION.default)),
            lightness=params.LIGHTNESS.clamp(data.get("lightness", params.LIGHTNESS.default)),
        )


@dataclass
class ChannelSetting:
    """One channel of the Random behavior: drawn at random or pinned"""
    is_random: bool
    fixed_value: int


@dataclass
class RandomParams:
    """
    Random behavior parameters

    Persisted in the flat record shape:
        {isHueRandom, isSaturationRandom, isLightnessRandom,
         hue, saturation, lightness}
    """
    hue: ChannelSetting = field(default_factory=lambda: ChannelSetting(True, params.HUE.default))
    saturation: ChannelSetting = field(default_factory=lambda: ChannelSetting(False, params.SATURATION.default))
    lightness: ChannelSetting = field(default_factory=lambda: ChannelSetting(False, params.LIGHTNESS.default))

    def initial_color(self) -> HSLColor:
        return HSLColor(
            h=self.hue.fixed_value,
            s=self.saturation.fixed_value,
            l=self.lightness.fixed_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isHueRandom": self.hue.is_random,
            "isSaturationRandom": self.saturation.is_random,
            "isLightnessRandom": self.lightness.is_random,
            "hue": self.hue.fixed_value,
            "saturation": self.saturation.fixed_value,
            "lightness": self.lightness.fixed_value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RandomParams':
        defaults = cls()
        return cls(
            hue=ChannelSetting(
                bool(data.get("isHueRandom", defaults.hue.is_random)),
                params.HUE.clamp(data.get("hue", defaults.hue.fixed_value)),
            ),
            saturation=ChannelSetting(
                bool(data.get("isSaturationRandom", defaults.saturation.is_random)),
                params.SATURATION.clamp(data.get("saturation", defaults.saturation.fixed_value)),
            ),
            lightness=ChannelSetting(
                bool(data.get("isLightnessRandom", defaults.lightness.is_random)),
                params.LIGHTNESS.clamp(data.get("lightness", defaults.lightness.fixed_value)),
            ),
        )


DEFAULT_PRESET_COLOR = HSLColor(h=0, s=100, l=50)


@dataclass
class PresetParams:
    """
    Preset behavior parameters

    Invariants: color_list is never empty and current_index always points
    into it. remove() refuses to delete the last entry.
    """
    current_index: int = 0
    color_list: List[HSLColor] = field(default_factory=lambda: [DEFAULT_PRESET_COLOR])

    def __post_init__(self):
        if not self.color_list:
            self.color_list = [DEFAULT_PRESET_COLOR]
        if not 0 <= self.current_index < len(self.color_list):
            self.current_index = 0

    def current(self) -> Optional[HSLColor]:
        if not self.color_list:
            return None
        return self.color_list[self.current_index]

    def advance(self) -> Optional[HSLColor]:
        """Step to the next entry (wraps). Returns None for an empty list."""
        if not self.color_list:
            return None
        self.current_index = (self.current_index + 1) % len(self.color_list)
        return self.color_list[self.current_index]

    def add(self, color: HSLColor = DEFAULT_PRESET_COLOR) -> int:
        """Append a color, return its index"""
        self.color_list.append(color)
        return len(self.color_list) - 1

    def remove(self, index: int) -> bool:
        """
        Remove entry at index and reset current_index to 0

        Returns:
            False (list untouched) if this is the only remaining entry
        """
        if len(self.color_list) <= 1:
            return False
        del self.color_list[index]
        self.current_index = 0
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPresetIndex": self.current_index,
            "colorList": [c.to_dict() for c in self.color_list],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PresetParams':
        colors = [HSLColor.from_dict(c) for c in data.get("colorList") or [] if isinstance(c, dict)]
        index = data.get("currentPresetIndex", 0)
        if isinstance(index, bool) or not isinstance(index, int):
            index = 0
        return cls(current_index=index, color_list=colors)
