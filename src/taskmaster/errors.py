"""
Domain errors raised by the task core.

Every error carries a ``kind`` (the name the HTTP layer reports) and a
human-readable ``message``. The routing layer maps ``NotFoundError`` kinds to
404 and every other ``TaskError`` to 400; anything that is not a ``TaskError``
is treated as a technical failure.
"""
from __future__ import annotations


class TaskError(Exception):
    """Base class for all task domain errors. Not raised directly."""

    kind = "TaskError"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TaskValidationError(TaskError):
    """Malformed input or arguments (empty title, unknown priority, bad tags, ...)."""

    kind = "ValidationError"


class InvalidTaskError(TaskError):
    """A stored record is structurally broken (no id, no title, non-bool completed)."""

    kind = "InvalidStateError"


class TaskStateError(TaskError):
    """The operation is not valid for the task's current state, e.g. double-complete."""

    kind = "StateError"


class DuplicateTagError(TaskError):
    kind = "DuplicateError"

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag '{tag}' already exists on this task")


class NotFoundError(TaskError):
    kind = "NotFoundError"


class TaskNotFoundError(NotFoundError):
    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task with id {task_id} not found")


class TagNotFoundError(NotFoundError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag '{tag}' not found on this task")


class ImportFormatError(TaskError):
    """Import payload is not JSON, or not a JSON array."""

    kind = "FormatError"
