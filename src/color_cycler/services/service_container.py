"""Service Container - holds every core service for one running app"""

from dataclasses import dataclass

from color_cycler.models.domain import GlobalSettings
from color_cycler.services.context_selector import ContextSelector
from color_cycler.services.cycle_engine import CycleEngine
from color_cycler.services.event_bus import EventBus
from color_cycler.services.persistence import PersistenceService
from color_cycler.services.settings_service import SettingsService


@dataclass
class ServiceContainer:
    """
    Dependency container built once settings are loaded

    The settings object is owned here and passed by reference to every
    service; dropping the container at teardown releases it.

    Usage:
        services = ServiceContainer(
            settings=settings,
            event_bus=event_bus,
            persistence=persistence,
            selector=selector,
            engine=engine,
            settings_service=settings_service,
        )
    """

    settings: GlobalSettings
    event_bus: EventBus
    persistence: PersistenceService
    selector: ContextSelector
    engine: CycleEngine
    settings_service: SettingsService
