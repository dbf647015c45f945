"""
Task Registry
-------------

Every asyncio task the color cycler starts (cycle timers, the settings
writer, async event handlers, the terminal reader) is created through
create_tracked_task() so that:
- failures are logged even when nobody awaits the task
- teardown and tests can list what is still running
"""

from __future__ import annotations

import asyncio
import itertools
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Coroutine, Deque, Dict, List, Optional

from color_cycler.models.enums import LogCategory
from color_cycler.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TASK)

FAILED_HISTORY_LIMIT = 20


class TaskCategory(Enum):
    """What a background task is for"""
    TIMER = auto()
    PERSISTENCE = auto()
    EVENTBUS = auto()
    INPUT = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    """Metadata captured at creation time"""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string


@dataclass
class TaskRecord:
    task: asyncio.Task
    info: TaskInfo
    finished_with_error: Optional[BaseException] = None

    @property
    def label(self) -> str:
        return f"[Task {self.info.id}] {self.info.category.name} {self.info.description}"


class TaskRegistry:
    """
    Process-wide registry of tracked tasks

    Records are dropped when their task completes. The most recent
    FAILED_HISTORY_LIMIT failures are kept so failed() can report them.
    """

    _instance: Optional[TaskRegistry] = None

    def __init__(self) -> None:
        self._records: Dict[asyncio.Task, TaskRecord] = {}
        self._ids = itertools.count(1)
        self._failed: Deque[TaskRecord] = deque(maxlen=FAILED_HISTORY_LIMIT)

    @classmethod
    def instance(cls) -> TaskRegistry:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        info = TaskInfo(
            id=next(self._ids),
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        record = TaskRecord(task=task, info=info)
        self._records[task] = record
        task.add_done_callback(self._on_task_done)

        log.debug(f"{record.label} registered")
        return info.id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._records.pop(task, None)
        if record is None:
            return

        error = None if task.cancelled() else task.exception()
        if error is None:
            log.debug(f"{record.label} {'cancelled' if task.cancelled() else 'finished'}")
            return

        record.finished_with_error = error
        self._failed.append(record)
        log.error(f"{record.label} FAILED", error=repr(error))

    # === Introspection ===

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self, category: Optional[TaskCategory] = None) -> List[TaskRecord]:
        """Tasks still running, optionally of one category"""
        return [
            r for r in self._records.values()
            if not r.task.done() and (category is None or r.info.category is category)
        ]

    def failed(self) -> List[TaskRecord]:
        """Most recent failures, oldest first"""
        return list(self._failed)

    def summary(self) -> str:
        return f"Tasks: running={len(self.active())}, failed={len(self.failed())}"


def create_tracked_task(
    coro: Coroutine,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> asyncio.Task:
    """
    Create a task and register it in one call

    Must be called with a running event loop unless `loop` is given.
    """
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro)
    TaskRegistry.instance().register(task, category, description)
    return task
