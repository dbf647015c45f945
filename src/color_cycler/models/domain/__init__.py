"""Domain models - settings objects"""

from color_cycler.models.domain.behavior import (
    IncrementParams, RandomParams, PresetParams, ChannelSetting, DEFAULT_PRESET_COLOR
)
from color_cycler.models.domain.context import ContextSettings, TimerConfig
from color_cycler.models.domain.settings import (
    GlobalSettings, UnknownContextError, SCHEMA_VERSION
)

__all__ = [
    "IncrementParams",
    "RandomParams",
    "PresetParams",
    "ChannelSetting",
    "DEFAULT_PRESET_COLOR",
    "ContextSettings",
    "TimerConfig",
    "GlobalSettings",
    "UnknownContextError",
    "SCHEMA_VERSION",
]
