from dataclasses import dataclass
from typing import Optional

from color_cycler.models.color import HSLColor
from color_cycler.models.enums import ContextID
from color_cycler.models.events.base import Event
from color_cycler.models.events.sources import EventSource
from color_cycler.models.events.types import EventType


@dataclass(init=False)
class ColorChangedEvent(Event):
    """
    Fired whenever the color of the active context is (re)applied:
    - manual or timer cycle
    - behavior reset after a configuration change
    - active context switch (display refresh, no cycle)
    """

    context_id: ContextID
    color: HSLColor
    triggered_by_timer: bool = False

    def __init__(
        self,
        *,
        context_id: ContextID,
        color: HSLColor,
        triggered_by_timer: bool = False,
        source: EventSource = EventSource.CYCLE_ENGINE,
    ):
        super().__init__(type=EventType.COLOR_CHANGED, source=source)
        self.context_id = context_id
        self.color = color
        self.triggered_by_timer = triggered_by_timer


@dataclass(init=False)
class ActiveContextChangedEvent(Event):
    """Fired when the context selector resolves a different active context"""

    previous: Optional[ContextID]
    current: ContextID

    def __init__(self, *, previous: Optional[ContextID], current: ContextID):
        super().__init__(type=EventType.ACTIVE_CONTEXT_CHANGED, source=EventSource.CONTEXT_SELECTOR)
        self.previous = previous
        self.current = current


@dataclass(init=False)
class VisibilityChangedEvent(Event):
    """Fired when a host display flag (status indicator / ribbon icon) changes"""

    show_status_indicator: bool
    show_ribbon_icon: bool

    def __init__(self, *, show_status_indicator: bool, show_ribbon_icon: bool):
        super().__init__(type=EventType.VISIBILITY_CHANGED, source=EventSource.SETTINGS)
        self.show_status_indicator = show_status_indicator
        self.show_ribbon_icon = show_ribbon_icon
