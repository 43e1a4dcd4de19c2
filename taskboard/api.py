"""
TaskAPI — Request handler layer
===============================
Turns already-routed requests into TaskStore operations and shapes the
JSON bodies. Failures are raised as TaskboardError subclasses; the HTTP
app maps them to status codes.

Dependencies: TaskStore, validation
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from taskboard.errors import InvalidPriorityError, NotFoundError, ValidationError
from taskboard.models import Priority
from taskboard.store import TaskStore
from taskboard.validation import TaskPayload, validate_task

logger = logging.getLogger(__name__)

SORT_FIELDS = ("createdAt", "-createdAt")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_task_id(raw: Any) -> Optional[int]:
    """Read the leading integer of a path segment ("12abc" -> 12, "abc" -> None)."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # digit run past the interpreter's int-string limit; no task can match
        return None


class TaskAPI:
    """Request handlers for the /tasks resource.

    Each method returns a JSON-ready value (dict or list of dicts).
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def list_tasks(self, completed: Optional[str] = None, sort: Optional[str] = None) -> list[dict]:
        """GET /tasks: optional completed filter, then optional createdAt sort.

        Any value of ``completed`` other than "true" filters for incomplete
        tasks; only absence of the parameter skips filtering.
        """
        if completed is not None:
            tasks = self.store.filter_by_completed(completed == "true")
        else:
            tasks = self.store.list()

        if sort in SORT_FIELDS:
            tasks = self.store.sort_by_created_at(tasks, descending=sort.startswith("-"))

        return [t.to_dict() for t in tasks]

    def list_by_priority(self, level: str) -> list[dict]:
        """GET /tasks/priority/{level}"""
        level = level.lower()
        if level not in Priority.values():
            logger.info("Rejected priority level %r", level)
            raise InvalidPriorityError()
        return [t.to_dict() for t in self.store.filter_by_priority(level)]

    def get_task(self, raw_id: Any) -> dict:
        """GET /tasks/{id}"""
        return self.store.get(parse_task_id(raw_id)).to_dict()

    def create_task(self, body: Any) -> dict:
        """POST /tasks: validate, then create. The route answers 201."""
        payload = self._validated(body)
        task = self.store.create(
            title=payload.title,
            description=payload.description,
            completed=payload.completed,
            priority=payload.priority,
        )
        return task.to_dict()

    def update_task(self, raw_id: Any, body: Any) -> dict:
        """PUT /tasks/{id}: unknown id is reported before any validation error."""
        task_id = parse_task_id(raw_id)
        if not self.store.exists(task_id):
            raise NotFoundError()

        payload = self._validated(body)
        task = self.store.update(
            task_id,
            title=payload.title,
            description=payload.description,
            completed=payload.completed,
            priority=payload.priority if payload.has("priority") else None,
        )
        return task.to_dict()

    def delete_task(self, raw_id: Any) -> dict:
        """DELETE /tasks/{id}"""
        return self.store.delete(parse_task_id(raw_id)).to_dict()

    @staticmethod
    def _validated(body: Any) -> TaskPayload:
        payload = TaskPayload.from_body(body)
        try:
            validate_task(payload)
        except ValidationError as e:
            logger.info("Rejected task payload: %s", e.message)
            raise
        return payload
