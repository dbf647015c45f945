"""Cycle engine - computes, bounds and commits the next color"""

import asyncio
from typing import Awaitable, Callable, Optional

from color_cycler.behaviors import BehaviorRegistry
from color_cycler.models.color import HSLColor
from color_cycler.models.domain import ContextSettings, GlobalSettings, UnknownContextError
from color_cycler.models.enums import ContextID, LogCategory
from color_cycler.models.events import ColorChangedEvent, EventSource, EventType
from color_cycler.services.context_selector import ContextSelector
from color_cycler.services.event_bus import EventBus
from color_cycler.services.persistence import PersistenceService
from color_cycler.services.timer_scheduler import TimerScheduler
from color_cycler.utils.colors import normalize
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.COLOR)


class CycleEngine:
    """
    Orchestrates one cycle:

    1. Resolve the context (active one unless given explicitly)
    2. raw = strategy.next_color(context)
    3. context.color = normalize(raw)
    4. Publish COLOR_CHANGED (active context only)
    5. Manual: re-arm the timer and save now.
       Timer: save only if the debounce window allows it.

    cycle() never awaits, so each cycle runs to completion (including its
    save decision) before another manual or timer cycle can start.

    Args:
        settings: Owned settings object (mutated in place)
        selector: Active context resolver
        persistence: Save policy + host store
        event_bus: Observer notifications
        behaviors: Strategy registry (default: increment/random/preset)
        scheduler: Timer scheduler (default: one that ticks into cycle())
        sleep: Sleep used by the default scheduler
    """

    def __init__(
        self,
        settings: GlobalSettings,
        selector: ContextSelector,
        persistence: PersistenceService,
        event_bus: EventBus,
        behaviors: Optional[BehaviorRegistry] = None,
        scheduler: Optional[TimerScheduler] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings
        self.selector = selector
        self.persistence = persistence
        self.event_bus = event_bus
        self.behaviors = behaviors or BehaviorRegistry.default()
        self.scheduler = scheduler or TimerScheduler(self._on_timer_tick, sleep=sleep)

        self.event_bus.subscribe(EventType.ACTIVE_CONTEXT_CHANGED, self._on_active_context_changed)

    # === Context helpers ===

    @property
    def active_context_id(self) -> ContextID:
        return self.selector.active

    @property
    def active_context(self) -> ContextSettings:
        return self.settings.get_context(self.selector.active)

    def _resolve(self, context_id: Optional[ContextID]) -> ContextID:
        if context_id is None:
            return self.selector.active
        try:
            return ContextID(context_id)
        except ValueError:
            raise UnknownContextError(context_id) from None

    # === Cycling ===

    def cycle(self, context_id: Optional[ContextID] = None, triggered_by_timer: bool = False) -> HSLColor:
        """
        Compute and commit the next color

        Args:
            context_id: Context to cycle (default: active context)
            triggered_by_timer: True when called from the timer scheduler

        Returns:
            The new normalized color
        """
        context_id = self._resolve(context_id)
        context = self.settings.get_context(context_id)

        raw = self.behaviors.next_color(context)
        color = self._commit(context_id, context, raw, triggered_by_timer)

        if triggered_by_timer:
            self.persistence.persist_throttled(self.settings)
        else:
            if context_id is self.selector.active:
                # a manual cycle restarts the countdown
                self.arm_timer()
            self.persistence.persist(self.settings)

        log.debug(
            "Cycled",
            context=context_id.value,
            behavior=context.behavior.value,
            hsl=color.status_text(),
            timer=triggered_by_timer
        )
        return color

    def apply_color(
        self,
        context_id: Optional[ContextID],
        color: HSLColor,
        source: EventSource = EventSource.SETTINGS,
    ) -> HSLColor:
        """Normalize, store, notify and save a color (configuration resets)"""
        context_id = self._resolve(context_id)
        context = self.settings.get_context(context_id)
        color = self._commit(context_id, context, color, False, source)
        self.persistence.persist(self.settings)
        return color

    def apply_initial_color(self, context_id: Optional[ContextID] = None) -> HSLColor:
        """Reset the context to its behavior's starting color"""
        context_id = self._resolve(context_id)
        context = self.settings.get_context(context_id)
        return self.apply_color(context_id, self.behaviors.initial_color(context))

    def _commit(
        self,
        context_id: ContextID,
        context: ContextSettings,
        raw: HSLColor,
        triggered_by_timer: bool,
        source: EventSource = EventSource.CYCLE_ENGINE,
    ) -> HSLColor:
        color = normalize(raw)
        context.color = color
        if context_id is self.selector.active:
            self.event_bus.publish(ColorChangedEvent(
                context_id=context_id,
                color=color,
                triggered_by_timer=triggered_by_timer,
                source=source,
            ))
        return color

    # === Timer / display refresh ===

    def arm_timer(self) -> bool:
        """(Re)start the timer for the active context"""
        return self.scheduler.set_timer(self.selector.active, self.active_context.timer)

    def refresh(self) -> None:
        """Re-publish the active context's color and re-arm its timer (no cycle)"""
        context_id = self.selector.active
        self.event_bus.publish(ColorChangedEvent(
            context_id=context_id,
            color=self.active_context.color,
            source=EventSource.CONTEXT_SELECTOR,
        ))
        self.arm_timer()

    def _on_timer_tick(self, context_id: ContextID) -> None:
        self.cycle(context_id, triggered_by_timer=True)

    def _on_active_context_changed(self, event) -> None:
        self.refresh()

    async def shutdown(self) -> None:
        """Cancel outstanding timers and stop following context changes"""
        self.event_bus.unsubscribe(EventType.ACTIVE_CONTEXT_CHANGED, self._on_active_context_changed)
        await self.scheduler.shutdown()
