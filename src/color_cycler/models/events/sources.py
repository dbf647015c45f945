from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers"""
    CYCLE_ENGINE = auto()       # Manual or timer cycles
    SETTINGS = auto()           # Configuration boundary
    CONTEXT_SELECTOR = auto()   # Theme / separate-contexts resolution
