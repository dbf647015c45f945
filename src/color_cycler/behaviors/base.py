"""
Base Behavior Class

All cycle behaviors inherit from BaseBehavior and implement next_color().
"""

from typing import ClassVar, Optional

from color_cycler.models.color import HSLColor
from color_cycler.models.domain.context import ContextSettings
from color_cycler.models.enums import BehaviorKind


class BaseBehavior:
    """
    Base class for cycle behaviors

    A behavior computes the raw (un-normalized) next color for a context.
    Behaviors are stateless apart from an injected random source; any
    per-context state they advance (preset index) lives on the
    ContextSettings passed in.

    Subclasses MUST set KIND and implement next_color().
    """
    KIND: ClassVar[Optional[BehaviorKind]] = None

    def next_color(self, current: HSLColor, context: ContextSettings) -> HSLColor:
        raise NotImplementedError

    def initial_color(self, context: ContextSettings) -> HSLColor:
        """
        One-time reset color, applied when the behavior is selected or its
        parameters change. Not part of the per-cycle computation.
        """
        return context.initial_color()
