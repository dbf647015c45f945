"""Context settings domain model"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from color_cycler.models.color import HSLColor
from color_cycler.models.enums import BehaviorKind
from color_cycler.models.domain.behavior import IncrementParams, RandomParams, PresetParams
from color_cycler.models import params


@dataclass
class TimerConfig:
    """
    Recurring cycle timer

    seconds=None (or 0) disables the timer regardless of `enabled`.
    """
    enabled: bool = False
    seconds: Optional[int] = None

    @property
    def interval(self) -> Optional[int]:
        """Effective interval in seconds, clamped to [1, 86400], or None if inactive"""
        if not self.enabled or not self.seconds or self.seconds <= 0:
            return None
        return params.TIMER_SECONDS.clamp(self.seconds)

    def to_dict(self) -> Dict[str, Any]:
        return {"enabled": self.enabled, "seconds": self.seconds}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TimerConfig':
        seconds = data.get("seconds")
        if seconds is not None:
            seconds = params.TIMER_SECONDS.clamp(seconds) if seconds else None
        return cls(enabled=bool(data.get("enabled", False)), seconds=seconds)


@dataclass
class ContextSettings:
    """
    Full cycling configuration for one context (base / dark / light)

    This is the unit the cycle engine operates on and the unit migrated
    from older flat settings files. Default values defined here are the
    single source of truth for the settings loader.
    """
    color: HSLColor = field(default_factory=HSLColor)
    behavior: BehaviorKind = BehaviorKind.INCREMENT
    increment: IncrementParams = field(default_factory=IncrementParams)
    random: RandomParams = field(default_factory=RandomParams)
    preset: PresetParams = field(default_factory=PresetParams)
    timer: TimerConfig = field(default_factory=TimerConfig)

    def initial_color(self) -> HSLColor:
        """Reset color for the selected behavior (applied on selection/param change)"""
        if self.behavior is BehaviorKind.INCREMENT:
            return self.increment.initial_color()
        if self.behavior is BehaviorKind.RANDOM:
            return self.random.initial_color()
        if self.behavior is BehaviorKind.PRESET:
            return self.preset.current() or self.color
        return self.color

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": self.color.to_dict(),
            "behavior": self.behavior.value,
            "increment": self.increment.to_dict(),
            "random": self.random.to_dict(),
            "preset": self.preset.to_dict(),
            "timer": self.timer.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContextSettings':
        try:
            behavior = BehaviorKind(data.get("behavior", BehaviorKind.INCREMENT.value))
        except ValueError:
            behavior = BehaviorKind.INCREMENT
        return cls(
            color=HSLColor.from_dict(data.get("color") or {}),
            behavior=behavior,
            increment=IncrementParams.from_dict(data.get("increment") or {}),
            random=RandomParams.from_dict(data.get("random") or {}),
            preset=PresetParams.from_dict(data.get("preset") or {}),
            timer=TimerConfig.from_dict(data.get("timer") or {}),
        )
