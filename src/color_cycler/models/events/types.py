from enum import Enum, auto


class EventType(Enum):
    # Color
    COLOR_CHANGED = auto()

    # Context
    ACTIVE_CONTEXT_CHANGED = auto()

    # Host presentation
    VISIBILITY_CHANGED = auto()
