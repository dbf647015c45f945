"""Persistence service - loads, migrates and saves the settings record"""

import asyncio
import time
from typing import Any, Callable, Dict, Optional, Protocol

from color_cycler.lifecycle.task_registry import create_tracked_task, TaskCategory
from color_cycler.models.domain import GlobalSettings
from color_cycler.models.enums import LogCategory
from color_cycler.services.migration import migrate
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STATE)

DEFAULT_PERSIST_WINDOW = 60.0


class SettingsStore(Protocol):
    """Host key-value persistence: the whole record is read/written at once"""

    async def load(self) -> Optional[Dict[str, Any]]: ...

    async def save(self, record: Dict[str, Any]) -> None: ...


def should_persist(now: float, last_save_at: Optional[float], window: float = DEFAULT_PERSIST_WINDOW) -> bool:
    """
    Debounce predicate for timer-triggered saves

    True when nothing was saved yet or at least `window` seconds passed
    since the last save.
    """
    return last_save_at is None or now - last_save_at >= window


class PersistenceService:
    """
    Owns every write to the host store

    - persist(): always saves (manual cycles, configuration changes)
    - persist_throttled(): saves only when should_persist() allows it
      (timer cycles), bounding writes to one per window
    - Writes are fire-and-forget: the latest record is handed to a single
      writer task, so saves never overlap and never block a cycle. The
      in-memory settings stay authoritative.

    Args:
        store: Host store implementing load()/save()
        clock: Monotonic time source (injectable for tests)
        window: Debounce window in seconds for throttled saves
    """

    def __init__(
        self,
        store: SettingsStore,
        clock: Callable[[], float] = time.monotonic,
        window: float = DEFAULT_PERSIST_WINDOW,
    ):
        self.store = store
        self.clock = clock
        self.window = window
        self.last_save_at: Optional[float] = None
        self.dirty = False

        self._pending_record: Optional[Dict[str, Any]] = None
        self._pending_at: Optional[float] = None
        self._writer_task: Optional[asyncio.Task] = None

    # === Loading ===

    async def load_settings(self) -> GlobalSettings:
        """
        Load the persisted record, upgrade it, and return the settings object

        Older schemas are re-saved immediately so the next load sees only the
        current shape. Store failures fall back to defaults.
        """
        try:
            saved = await self.store.load()
        except Exception as e:
            log.error("Failed to load settings, using defaults", error=repr(e))
            saved = None

        result = migrate(saved)
        settings = result.to_settings()

        if result.migrated:
            log.info("Saving migrated settings", from_version=result.from_version)
            if await self._write(settings.to_dict()):
                self.last_save_at = self.clock()
        elif saved is None:
            log.info("No saved settings, using defaults")

        return settings

    # === Saving ===

    def persist(self, settings: GlobalSettings) -> None:
        """
        Save now (fire-and-forget)

        last_save_at moves only once the store accepted the record; a failed
        write marks the settings dirty again so flush() retries it.
        """
        self.dirty = False
        self._pending_record = settings.to_dict()
        self._pending_at = self.clock()
        self._ensure_writer()

    def persist_throttled(self, settings: GlobalSettings) -> bool:
        """
        Save only if the debounce window allows it

        Returns:
            True if a save was scheduled, False if it was skipped
        """
        if should_persist(self.clock(), self._debounce_anchor(), self.window):
            self.persist(settings)
            return True

        self.dirty = True
        log.debug("Timer save skipped (debounce window)")
        return False

    async def flush(self, settings: GlobalSettings) -> None:
        """Write skipped changes (if any) and wait for the writer to finish"""
        if self.dirty:
            self.persist(settings)
        await self.drain()

    async def drain(self) -> None:
        """Wait until every scheduled save reached the store"""
        while self._writer_task is not None and not self._writer_task.done():
            await asyncio.shield(self._writer_task)

    # === Internal ===

    def _debounce_anchor(self) -> Optional[float]:
        # A save still on its way to the store counts as the latest one
        if self._writer_task is not None and not self._writer_task.done():
            return self._pending_at if self._pending_at is not None else self.last_save_at
        return self.last_save_at

    def _ensure_writer(self) -> None:
        if self._writer_task is not None and not self._writer_task.done():
            return

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.dirty = True
            log.warn("No running event loop, save deferred until flush()")
            return

        self._writer_task = create_tracked_task(
            self._writer_loop(),
            category=TaskCategory.PERSISTENCE,
            description="Settings writer"
        )

    async def _writer_loop(self) -> None:
        while self._pending_record is not None:
            record, self._pending_record = self._pending_record, None
            requested_at = self._pending_at
            if await self._write(record):
                self.last_save_at = requested_at
            else:
                self.dirty = True

    async def _write(self, record: Dict[str, Any]) -> bool:
        """Hand one record to the store; False if it failed"""
        try:
            await self.store.save(record)
        except Exception as e:
            log.error("Failed to save settings", error=repr(e))
            return False

        log.debug("Settings saved")
        return True
