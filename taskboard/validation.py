"""
Task Payload Validation
=======================
Request bodies are decoded into ``TaskPayload`` first, which keeps the raw
JSON values and records which keys were actually sent. ``validate_task``
then applies the field rules in a fixed order; the first failure wins.

    1. title        — non-empty string
    2. description  — non-empty string
    3. completed    — a real boolean
    4. priority     — optional, one of low / medium / high
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from taskboard.errors import ValidationError
from taskboard.models import Priority


class TaskPayload(BaseModel):
    """Create/update body with field presence preserved.

    Fields are typed ``Any`` on purpose: type checks happen in
    ``validate_task`` so each failure gets its own message instead of a
    generic schema error.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    completed: Any = None
    priority: Any = None

    @classmethod
    def from_body(cls, body: Any) -> TaskPayload:
        """Decode a parsed JSON body. Non-object bodies decode to an empty payload."""
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)

    def has(self, field_name: str) -> bool:
        """Whether the client sent ``field_name`` at all (null counts as sent)."""
        return field_name in self.model_fields_set


def _check_text(value: Any, label: str) -> Optional[str]:
    if not isinstance(value, str) or value == "":
        return f"{label} is required and must be a string"
    if not value.strip():
        return f"{label} cannot be empty"
    return None


def check_task(payload: TaskPayload) -> Optional[str]:
    """Return the first rule violation as a message, or None when valid."""
    error = _check_text(payload.title, "Title")
    if error:
        return error

    error = _check_text(payload.description, "Description")
    if error:
        return error

    if not isinstance(payload.completed, bool):
        return "Completed is required and must be a boolean"

    if payload.has("priority") and payload.priority not in Priority.values():
        return "Priority must be one of: low, medium, high"

    return None


def validate_task(payload: TaskPayload) -> None:
    """Raise ValidationError if the payload breaks any field rule."""
    error = check_task(payload)
    if error:
        raise ValidationError(error)
