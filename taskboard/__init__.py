"""
Taskboard — In-memory task management HTTP API
===============================================
Create, read, update, delete, filter and sort task records held in
process memory, seeded from a JSON file at startup.

Architecture:
    TaskStore  — Task collection + monotonic id counter
    TaskAPI    — Validation and request handling
    Server     — FastAPI app mounted at /api/v1
"""

__version__ = "1.0.0"

from taskboard.errors import (
    TaskboardError, ValidationError, NotFoundError, InvalidPriorityError, SeedError,
)
from taskboard.models import Task, Priority
from taskboard.store import TaskStore
from taskboard.api import TaskAPI

__all__ = [
    "TaskboardError", "ValidationError", "NotFoundError", "InvalidPriorityError", "SeedError",
    "Task", "Priority",
    "TaskStore", "TaskAPI",
]
