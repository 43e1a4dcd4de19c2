"""
Taskboard Errors
================
Every error the request boundary knows how to answer carries its own
HTTP status. The server turns any ``TaskboardError`` into
``{"error": message}`` with that status.
"""

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(TaskboardError):
    """A create/update payload broke a field rule."""

    status_code = 400


class NotFoundError(TaskboardError):
    """No task has the requested id."""

    status_code = 404

    def __init__(self, message: str = "Task not found"):
        super().__init__(message)


class InvalidPriorityError(TaskboardError):
    """The ``:level`` path segment is not a known priority."""

    status_code = 400

    def __init__(self, message: str = "Invalid priority level. Must be one of: low, medium, high"):
        super().__init__(message)


class SeedError(Exception):
    """The seed file could not be read or has the wrong shape."""
    pass
