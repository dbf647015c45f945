"""Timer scheduler - recurring cycle trigger for the active context"""

import asyncio
import contextlib
from typing import Awaitable, Callable, Optional

from color_cycler.lifecycle.task_registry import create_tracked_task, TaskCategory
from color_cycler.models.domain import TimerConfig
from color_cycler.models.enums import ContextID, LogCategory
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TIMER)


class TimerScheduler:
    """
    Owns at most one recurring timer task

    set_timer() cancels the current task and starts the replacement in the
    same synchronous step, so two timers are never live at once.

    Args:
        on_tick: Called with the context id on every interval
        sleep: Awaitable sleep (injectable for tests)

    Example:
        scheduler = TimerScheduler(lambda cid: engine.cycle(cid, triggered_by_timer=True))
        scheduler.set_timer(ContextID.BASE, TimerConfig(enabled=True, seconds=30))
        ...
        await scheduler.shutdown()
    """

    def __init__(
        self,
        on_tick: Callable[[ContextID], None],
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._on_tick = on_tick
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self.context_id: Optional[ContextID] = None
        self.interval: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def set_timer(self, context_id: ContextID, timer: TimerConfig) -> bool:
        """
        Cancel any running timer and start a new one if the config is active

        Returns:
            True if a timer is now running
        """
        self.cancel()

        interval = timer.interval
        if interval is None:
            return False

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            log.warn("No running event loop, timer not armed", context=context_id.value)
            return False

        self.context_id = context_id
        self.interval = interval
        self._task = create_tracked_task(
            self._run(context_id, interval),
            category=TaskCategory.TIMER,
            description=f"Cycle timer ({context_id.value}, every {interval}s)"
        )
        log.info("Timer armed", context=context_id.value, seconds=interval)
        return True

    def cancel(self) -> None:
        """Cancel the running timer (if any)"""
        if self.is_active:
            self._task.cancel()
            log.debug("Timer cancelled", context=self.context_id.value)
        self._task = None
        self.context_id = None
        self.interval = None

    async def shutdown(self) -> None:
        """Cancel and wait for the timer task to finish (teardown)"""
        task = self._task
        self.cancel()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run(self, context_id: ContextID, interval: int) -> None:
        while True:
            await self._sleep(interval)
            try:
                self._on_tick(context_id)
            except Exception as e:
                log.error("Timer tick failed", context=context_id.value, error=repr(e))
