"""
Task Model
==========
The single record type served by the API, plus the priority levels and
the timestamp helpers shared by the store and the seed loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Priority(str, Enum):
    """Allowed priority levels, stored as their lowercase string value."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(p.value for p in cls)


DEFAULT_PRIORITY = Priority.MEDIUM.value

# Sorts unparseable timestamps ahead of everything else
_EPOCH_FLOOR = datetime.min.replace(tzinfo=timezone.utc)


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO 8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.123Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    """Parse a stored ``createdAt`` value into an aware datetime.

    Accepts ISO 8601 strings (with ``Z``, an offset, or naive = UTC) and
    numbers as epoch milliseconds. Anything else becomes the earliest
    possible instant so sorting never fails.
    """
    if isinstance(value, bool):
        return _EPOCH_FLOOR
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return _EPOCH_FLOOR
    if not isinstance(value, str):
        return _EPOCH_FLOOR

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _EPOCH_FLOOR
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Task:
    """One task record. ``id`` and ``created_at`` never change after creation."""

    id: int
    title: str
    description: str
    completed: bool
    priority: str = DEFAULT_PRIORITY
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON shape served by the API."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from its JSON shape, applying the priority and createdAt defaults."""
        return cls(
            id=data["id"],
            title=data.get("title"),
            description=data.get("description"),
            completed=data.get("completed"),
            priority=data.get("priority") or DEFAULT_PRIORITY,
            created_at=data.get("createdAt") or utc_timestamp(),
        )
