"""
Lifecycle subsystem
-------------------

Task tracking & introspection. External code should import from:
    from color_cycler.lifecycle import TaskRegistry, create_tracked_task
"""

from .task_registry import TaskRegistry, TaskCategory, TaskInfo, TaskRecord, create_tracked_task

__all__ = [
    "TaskRegistry",
    "TaskCategory",
    "TaskInfo",
    "TaskRecord",
    "create_tracked_task",
]
