"""
Event system for the color cycler

Observers (status display, host style channels) subscribe to these.
"""

from color_cycler.models.events.types import EventType
from color_cycler.models.events.base import Event
from color_cycler.models.events.sources import EventSource
from color_cycler.models.events.color_events import (
    ColorChangedEvent,
    ActiveContextChangedEvent,
    VisibilityChangedEvent,
)

__all__ = [
    "EventType",
    "Event",
    "EventSource",
    "ColorChangedEvent",
    "ActiveContextChangedEvent",
    "VisibilityChangedEvent",
]
