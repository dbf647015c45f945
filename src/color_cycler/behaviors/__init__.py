"""
Behaviors package - cycle strategies and dispatch

Dispatch is by BehaviorKind through BehaviorRegistry. A kind with no
registered strategy is a no-op (the current color is returned).
"""

import random
from typing import Dict, Optional

from color_cycler.behaviors.base import BaseBehavior
from color_cycler.behaviors.increment import IncrementBehavior
from color_cycler.behaviors.randomize import RandomBehavior
from color_cycler.behaviors.preset import PresetBehavior
from color_cycler.models.color import HSLColor
from color_cycler.models.domain.context import ContextSettings
from color_cycler.models.enums import BehaviorKind, LogCategory
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.BEHAVIOR)


class BehaviorRegistry:
    """
    Maps BehaviorKind -> strategy instance

    Example:
        registry = BehaviorRegistry.default(rng=random.Random(7))
        raw = registry.next_color(context)
    """

    def __init__(self, behaviors: Optional[Dict[BehaviorKind, BaseBehavior]] = None):
        self._behaviors: Dict[BehaviorKind, BaseBehavior] = dict(behaviors or {})

    @classmethod
    def default(cls, rng: Optional[random.Random] = None) -> 'BehaviorRegistry':
        return cls({
            BehaviorKind.INCREMENT: IncrementBehavior(),
            BehaviorKind.RANDOM: RandomBehavior(rng),
            BehaviorKind.PRESET: PresetBehavior(),
        })

    def register(self, behavior: BaseBehavior) -> None:
        self._behaviors[behavior.KIND] = behavior

    def get(self, kind: BehaviorKind) -> Optional[BaseBehavior]:
        return self._behaviors.get(kind)

    def next_color(self, context: ContextSettings) -> HSLColor:
        """Raw next color for the context's selected behavior"""
        behavior = self.get(context.behavior)
        if behavior is None:
            log.warn("No strategy for behavior, keeping current color", behavior=context.behavior)
            return context.color
        return behavior.next_color(context.color, context)

    def initial_color(self, context: ContextSettings) -> HSLColor:
        behavior = self.get(context.behavior)
        if behavior is None:
            return context.color
        return behavior.initial_color(context)


__all__ = [
    "BaseBehavior",
    "IncrementBehavior",
    "RandomBehavior",
    "PresetBehavior",
    "BehaviorRegistry",
]
