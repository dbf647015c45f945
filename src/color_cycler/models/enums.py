"""
Enums for the color cycling engine
"""

from enum import Enum, auto


class BehaviorKind(Enum):
    """
    Cycle behaviors (persisted by value)

    INCREMENT: Advance hue by a fixed number of degrees
    RANDOM: Draw channels at random (or pin them to fixed values)
    PRESET: Step through a user-defined list of colors
    """
    INCREMENT = "increment"
    RANDOM = "random"
    PRESET = "preset"


class ContextID(Enum):
    """Settings partitions, one per theme mode"""
    BASE = "base"
    DARK = "dark"
    LIGHT = "light"


class ColorChannel(Enum):
    """HSL channel identifiers"""
    HUE = auto()
    SATURATION = auto()
    LIGHTNESS = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    STATE = auto()       # Settings load/save
    COLOR = auto()       # Color changes
    BEHAVIOR = auto()    # Strategy dispatch
    TIMER = auto()       # Recurring cycle timers
    CONTEXT = auto()     # Active context resolution
    MIGRATION = auto()   # Settings schema upgrades
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors
    TASK = auto()        # Background asyncio tasks

    GENERAL = auto()    # Default general category
