from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from color_cycler.models.color import HSLColor
from color_cycler.models.events.types import EventType
from color_cycler.models.events.sources import EventSource

METADATA_FIELDS = ("type", "source", "timestamp")


@dataclass(init=False)
class Event:
    """
    Base event: type, source and creation time (time.time())

    Subclasses set their payload attributes in a keyword-only __init__ and
    call super().__init__(type=..., source=...).
    """

    type: EventType
    source: EventSource | None
    timestamp: float

    def __init__(self, *, type: EventType, source: EventSource | None):
        self.type = type
        self.source = source
        self.timestamp = time.time()

    def to_data(self) -> Dict[str, Any]:
        """Payload attributes (metadata excluded)"""
        return {k: v for k, v in self.__dict__.items() if k not in METADATA_FIELDS}

    def describe(self) -> str:
        """
        Compact one-line payload for logs

        Example:
            "context_id=base, color=HSL 30 100 50, triggered_by_timer=False"
        """
        parts = []
        for key, value in self.to_data().items():
            if isinstance(value, HSLColor):
                value = value.status_text()
            elif isinstance(value, Enum):
                value = value.value if isinstance(value.value, str) else value.name
            parts.append(f"{key}={value}")
        return ", ".join(parts)
