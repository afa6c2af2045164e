"""
Task Registry
-------------

Centralized tracking of asyncio tasks created across the application
(probe passes, frame loads, input adapters, API server).

Features:
- Register tasks with metadata (category, description, owner)
- Track creation time, completion state, cancellation, errors
- Introspection API for debugging
- Owner-scoped cancellation (a viewer cancels its own loads on close)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, List, Any
from datetime import datetime, timezone

from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


# ---------------------------------------------------------------------------
# TASK CATEGORY ENUM
# ---------------------------------------------------------------------------

class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    API = auto()
    PROBE = auto()
    INPUT = auto()
    EVENTBUS = auto()
    SYSTEM = auto()
    BACKGROUND = auto()


# ---------------------------------------------------------------------------
# TASK METADATA
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string
    owner: Optional[str] = None  # e.g. viewer id


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None
    finished_at: Optional[str] = None


# ---------------------------------------------------------------------------
# TASK REGISTRY SINGLETON
# ---------------------------------------------------------------------------

class TaskRegistry:
    """
    Global registry for asyncio tasks.

    Finished records are pruned once more than `history_limit` of them pile up;
    running tasks are never pruned.
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, history_limit: int = 500) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._next_id: int = 1
        self._history_limit = history_limit

    # -----------------------------
    # Singleton accessor
    # -----------------------------
    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests)."""
        cls._instance = None

    # -----------------------------
    # Register new task
    # -----------------------------
    def register(
        self,
        task: asyncio.Task,
        category: TaskCategory,
        description: str,
        owner: Optional[str] = None
    ) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
            owner=owner,
        )
        self._records[task_id] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        self._prune()

        return task_id

    # -----------------------------
    # Internal completion handler
    # -----------------------------
    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._get_record_by_task(task)
        if record is None:
            return

        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {exc}",
                description=record.info.description
            )
        else:
            record.finished_return = task.result()

    def _get_record_by_task(self, task: asyncio.Task) -> Optional[TaskRecord]:
        for record in self._records.values():
            if record.task is task:
                return record
        return None

    def _prune(self) -> None:
        """Drop the oldest finished records beyond the history limit."""
        # Only records whose outcome _on_task_done has already recorded
        finished = [tid for tid, r in self._records.items() if r.finished_at is not None]
        excess = len(finished) - self._history_limit
        for tid in finished[:max(excess, 0)]:
            del self._records[tid]

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self, owner: Optional[str] = None) -> List[TaskRecord]:
        """Tasks still running, optionally only those of one owner."""
        return [
            r for r in self._records.values()
            if not r.task.done() and (owner is None or r.info.owner == owner)
        ]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    def cancel_owner(self, owner: str) -> List[asyncio.Task]:
        """Cancel every running task of an owner; returns the cancelled tasks."""
        tasks = [r.task for r in self.active(owner)]
        for task in tasks:
            task.cancel()
        if tasks:
            log.debug(f"Cancelled {len(tasks)} tasks", owner=owner)
        return tasks

    def get_tasks_for_shutdown(
        self,
        exclude: Optional[List[asyncio.Task]] = None
    ) -> List[asyncio.Task]:
        """Return all tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [
            r.task for r in self._records.values()
            if not r.task.done() and r.task not in exclude
        ]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


# ---------------------------------------------------------------------------
# Convenience wrapper function
# ---------------------------------------------------------------------------

def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    owner: Optional[str] = None,
) -> asyncio.Task:
    """Create and register a task in a single call."""
    task = asyncio.get_running_loop().create_task(coro)

    TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description,
        owner=owner,
    )

    return task
