"""Services - cycle engine, timers, context selection, settings, persistence"""

from color_cycler.services.event_bus import EventBus
from color_cycler.services.persistence import PersistenceService, SettingsStore, should_persist
from color_cycler.services.timer_scheduler import TimerScheduler
from color_cycler.services.context_selector import ContextSelector
from color_cycler.services.cycle_engine import CycleEngine
from color_cycler.services.settings_service import SettingsService, PresetIndexError
from color_cycler.services.service_container import ServiceContainer

__all__ = [
    "EventBus",
    "PersistenceService",
    "SettingsStore",
    "should_persist",
    "TimerScheduler",
    "ContextSelector",
    "CycleEngine",
    "SettingsService",
    "PresetIndexError",
    "ServiceContainer",
]
