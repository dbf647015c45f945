"""
Color cycler application

Wires settings, persistence, context selection, the cycle engine and the
settings service together, and exposes the outputs a host renders:
status text, accent style channels and visibility flags.
"""

import asyncio
import random
import time
from typing import Awaitable, Callable, Dict, Optional

from color_cycler.behaviors import BehaviorRegistry
from color_cycler.lifecycle.task_registry import TaskRegistry
from color_cycler.models.color import HSLColor
from color_cycler.models.enums import ContextID, LogCategory
from color_cycler.services.context_selector import ContextSelector, ThemeSignal
from color_cycler.services.cycle_engine import CycleEngine
from color_cycler.services.event_bus import EventBus
from color_cycler.services.middleware import log_middleware
from color_cycler.services.persistence import DEFAULT_PERSIST_WINDOW, PersistenceService, SettingsStore
from color_cycler.services.service_container import ServiceContainer
from color_cycler.services.settings_service import SettingsService
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


class ColorCyclerApp:
    """
    Host-facing lifecycle: start() -> cycle()/settings changes -> shutdown()

    The event bus exists from construction so observers can subscribe before
    start(); the startup COLOR_CHANGED is then delivered to them.

    Args:
        store: Host settings store (load/save of the whole record)
        theme_signal: Returns the host's current theme ("dark"/"light"/...)
        clock: Monotonic clock used for the save debounce
        rng: Random source for the random behavior
        persist_window: Debounce window (seconds) for timer-triggered saves
        sleep: Timer sleep (injectable for tests)

    Example:
        app = ColorCyclerApp(StateManager("state/settings.json"), lambda: "dark")
        await app.start()
        app.cycle()
        app.status_text        # "HSL 30 100 50"
        await app.shutdown()
    """

    def __init__(
        self,
        store: SettingsStore,
        theme_signal: Optional[ThemeSignal] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
        persist_window: float = DEFAULT_PERSIST_WINDOW,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.store = store
        self.theme_signal = theme_signal
        self.clock = clock
        self.rng = rng
        self.persist_window = persist_window
        self.sleep = sleep

        self.event_bus = EventBus()
        self.event_bus.add_middleware(log_middleware)
        self.services: Optional[ServiceContainer] = None

    # === Lifecycle ===

    async def start(self) -> ServiceContainer:
        """Load (and migrate) settings, build services, apply the active color"""
        log.info("Starting color cycler...")

        persistence = PersistenceService(self.store, clock=self.clock, window=self.persist_window)
        settings = await persistence.load_settings()

        selector = ContextSelector(settings, self.theme_signal, self.event_bus)

        engine = CycleEngine(
            settings,
            selector,
            persistence,
            self.event_bus,
            behaviors=BehaviorRegistry.default(self.rng),
            sleep=self.sleep,
        )

        settings_service = SettingsService(settings, engine, selector, persistence, self.event_bus)

        self.services = ServiceContainer(
            settings=settings,
            event_bus=self.event_bus,
            persistence=persistence,
            selector=selector,
            engine=engine,
            settings_service=settings_service,
        )

        engine.refresh()
        log.info(
            "Color cycler ready",
            context=selector.active.value,
            hsl=self.current_color.status_text()
        )
        return self.services

    async def shutdown(self) -> None:
        """Cancel timers, write skipped timer saves, release the settings"""
        if self.services is None:
            return
        log.info("Shutting down color cycler...")
        await self.services.engine.shutdown()
        await self.services.persistence.flush(self.services.settings)
        self.services = None
        log.info(TaskRegistry.instance().summary())

    @property
    def is_running(self) -> bool:
        return self.services is not None

    # === Commands ===

    def cycle(self) -> Optional[HSLColor]:
        """Manual cycle of the active context (host command / ribbon click)"""
        if self.services is None:
            log.warn("Cycle requested before start()")
            return None
        return self.services.engine.cycle()

    def on_theme_changed(self) -> bool:
        """Host theme change notification"""
        if self.services is None:
            return False
        return self.services.selector.refresh()

    @property
    def settings_service(self) -> SettingsService:
        if self.services is None:
            raise RuntimeError("Color cycler not started")
        return self.services.settings_service

    # === Outputs ===

    @property
    def active_context(self) -> ContextID:
        return self.services.selector.active

    @property
    def current_color(self) -> HSLColor:
        return self.services.engine.active_context.color

    @property
    def status_text(self) -> str:
        return self.current_color.status_text()

    @property
    def style_channels(self) -> Dict[str, str]:
        """Host accent style channels (CSS custom properties)"""
        color = self.current_color
        return {
            "--accent-h": f"{color.h}",
            "--accent-s": f"{color.s}%",
            "--accent-l": f"{color.l}%",
        }

    @property
    def show_status_indicator(self) -> bool:
        return self.services.settings.show_status_indicator

    @property
    def show_ribbon_icon(self) -> bool:
        return self.services.settings.show_ribbon_icon
