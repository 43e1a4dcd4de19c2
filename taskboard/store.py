"""
Task Store — In-memory owner of the task collection
====================================================
Holds the authoritative list of tasks and the id counter.

    ◬ seed     — one-time initialization from the seed records
    Ө filter   — completed / priority subsets, createdAt ordering
    ☾ mutate   — create, update, delete

Ids are handed out from a counter that starts at (max seeded id) + 1 and
only ever moves forward, so a deleted id is never reused. One lock guards
the collection and the counter together, so the store stays consistent
under any runner, threaded or not; an id bump lands together with its
insert.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Iterable, Optional

from taskboard.errors import NotFoundError
from taskboard.models import DEFAULT_PRIORITY, Task, parse_timestamp, utc_timestamp

logger = logging.getLogger(__name__)


class TaskStore:
    """In-memory task collection.

    Usage:
        store = TaskStore(load_seed("tasks.json"))
        task = store.create(title="A", description="B", completed=False)
        store.get(task.id)

    Every method returns copies, so callers can never mutate stored
    records behind the store's back.
    """

    def __init__(self, initial_tasks: Optional[Iterable[dict[str, Any]]] = None):
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._next_id = 1
        self.seed(initial_tasks or [])

    # ─────────────────────────────────────────────
    #  Seeding
    # ─────────────────────────────────────────────

    def seed(self, initial_tasks: Iterable[dict[str, Any]]) -> None:
        """Load the startup records, filling in missing createdAt/priority."""
        with self._lock:
            self._tasks = [Task.from_dict(record) for record in initial_tasks]
            self._next_id = max((t.id for t in self._tasks), default=0) + 1
            logger.info("TaskStore seeded total=%d next_id=%d", len(self._tasks), self._next_id)

    # ─────────────────────────────────────────────
    #  Reads
    # ─────────────────────────────────────────────

    def list(self) -> list[Task]:
        """All tasks in insertion order."""
        with self._lock:
            return [replace(t) for t in self._tasks]

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __len__(self) -> int:
        return self.count()

    @property
    def next_id(self) -> int:
        """The id the next ``create`` will assign."""
        with self._lock:
            return self._next_id

    def exists(self, task_id: Optional[int]) -> bool:
        with self._lock:
            return self._index_of(task_id) is not None

    def get(self, task_id: Optional[int]) -> Task:
        """Return the task with ``task_id`` or raise NotFoundError."""
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                raise NotFoundError()
            return replace(self._tasks[index])

    def filter_by_completed(self, flag: bool) -> list[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks if t.completed is flag]

    def filter_by_priority(self, level: str) -> list[Task]:
        """Tasks whose stored priority matches ``level`` ignoring case."""
        level = level.lower()
        with self._lock:
            return [replace(t) for t in self._tasks if str(t.priority).lower() == level]

    @staticmethod
    def sort_by_created_at(tasks: Iterable[Task], descending: bool = False) -> list[Task]:
        """Stable sort on the parsed createdAt instant."""
        # sorted() keeps ties in input order for reverse=True as well
        return sorted(tasks, key=lambda t: parse_timestamp(t.created_at), reverse=descending)

    # ─────────────────────────────────────────────
    #  Mutations
    # ─────────────────────────────────────────────

    def create(
        self,
        *,
        title: str,
        description: str,
        completed: bool,
        priority: Optional[str] = None,
    ) -> Task:
        """Assign the next id and a fresh createdAt, then append."""
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description,
                completed=completed,
                priority=priority or DEFAULT_PRIORITY,
                created_at=utc_timestamp(),
            )
            self._next_id += 1
            self._tasks.append(task)
            logger.info("Task created id=%d priority=%s", task.id, task.priority)
            return replace(task)

    def update(
        self,
        task_id: Optional[int],
        *,
        title: str,
        description: str,
        completed: bool,
        priority: Optional[str] = None,
    ) -> Task:
        """Replace every field except id and createdAt.

        An omitted ``priority`` keeps the stored one. The task keeps its
        position in the collection.
        """
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                raise NotFoundError()
            current = self._tasks[index]
            updated = Task(
                id=current.id,
                title=title,
                description=description,
                completed=completed,
                priority=priority if priority is not None else current.priority,
                created_at=current.created_at,
            )
            self._tasks[index] = updated
            logger.info("Task updated id=%d", updated.id)
            return replace(updated)

    def delete(self, task_id: Optional[int]) -> Task:
        """Remove the task permanently and return it."""
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                raise NotFoundError()
            removed = self._tasks.pop(index)
            logger.info("Task deleted id=%d", removed.id)
            return removed

    # ─────────────────────────────────────────────
    #  Internals
    # ─────────────────────────────────────────────

    def _index_of(self, task_id: Optional[int]) -> Optional[int]:
        if task_id is None:
            return None
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None
