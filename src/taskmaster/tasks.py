"""
Task model operations.

Each function takes a task snapshot and returns a new one; the input is never
modified. Validation failures raise the errors from ``errors.py``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import (
    DuplicateTagError,
    InvalidTaskError,
    TagNotFoundError,
    TaskStateError,
    TaskValidationError,
)
from .models import PRIORITY_LEVELS, Task
from .utils import generate_id, utc_now_iso


def _clean_title(value: Any) -> str:
    if not isinstance(value, str) or value.strip() == "":
        raise TaskValidationError("Task title is required and must be a non-empty string")
    return value.strip()


def _clean_description(value: Any) -> str:
    if not isinstance(value, str):
        raise TaskValidationError("Task description must be a string")
    return value.strip()


def _clean_priority(value: Any) -> str:
    if value not in PRIORITY_LEVELS:
        raise TaskValidationError(f"Invalid priority. Must be one of: {', '.join(PRIORITY_LEVELS)}")
    return value


def _clean_tags(value: Any) -> List[str]:
    """Trim every tag; reject non-lists, non-string or empty tags and case-insensitive repeats."""
    if not isinstance(value, (list, tuple)):
        raise TaskValidationError("Tags must be an array")
    cleaned: List[str] = []
    seen = set()
    for tag in value:
        if not isinstance(tag, str):
            raise TaskValidationError("Tags must be strings")
        s = tag.strip()
        if s == "":
            raise TaskValidationError("Tags must be non-empty strings")
        if s.lower() in seen:
            raise TaskValidationError(f"Duplicate tag '{s}'")
        seen.add(s.lower())
        cleaned.append(s)
    return cleaned


# Fields a caller may change through update_task, with their validators
_UPDATABLE_FIELDS: Dict[str, Callable[[Any], Any]] = {
    "title": _clean_title,
    "description": _clean_description,
    "priority": _clean_priority,
    "tags": _clean_tags,
}


# PUBLIC_INTERFACE
def create_task(
    title: Any,
    description: Any = "",
    priority: Any = "medium",
    tags: Optional[Any] = None,
) -> Task:
    """
    Build a new, open task.

    Args:
        title: Non-empty title; surrounding whitespace is trimmed.
        description: Optional description (None is treated as '').
        priority: One of low/medium/high.
        tags: Optional list of tag strings; each is trimmed.

    Raises:
        TaskValidationError: on an empty title, unknown priority or malformed tags.
    """
    return {
        "id": generate_id(),
        "title": _clean_title(title),
        "description": _clean_description("" if description is None else description),
        "priority": _clean_priority(priority),  # type: ignore[typeddict-item]
        "tags": _clean_tags([] if tags is None else tags),
        "completed": False,
        "createdAt": utc_now_iso(),
        "completedAt": None,
    }


# PUBLIC_INTERFACE
def validate_task(task: Any) -> None:
    """
    Structural precondition shared by all mutators.

    Raises:
        InvalidTaskError: if the record has no id, no usable title or a
        non-boolean completed flag.
    """
    if not isinstance(task, Mapping):
        raise InvalidTaskError("Task must be an object")
    if not task.get("id"):
        raise InvalidTaskError("Task must have an id")
    title = task.get("title")
    if not isinstance(title, str) or title == "":
        raise InvalidTaskError("Task must have a valid title")
    if not isinstance(task.get("completed"), bool):
        raise InvalidTaskError("Task completed status must be a boolean")


# PUBLIC_INTERFACE
def complete_task(task: Task) -> Task:
    """Return a completed copy of ``task``; TaskStateError if it is already completed."""
    validate_task(task)
    if task["completed"]:
        raise TaskStateError("Task is already completed")
    return {**task, "completed": True, "completedAt": utc_now_iso()}


# PUBLIC_INTERFACE
def reopen_task(task: Task) -> Task:
    """Return an open copy of ``task``; TaskStateError if it is not completed."""
    validate_task(task)
    if not task["completed"]:
        raise TaskStateError("Task is not completed")
    return {**task, "completed": False, "completedAt": None}


# PUBLIC_INTERFACE
def update_task(task: Task, updates: Mapping[str, Any]) -> Task:
    """
    Apply a partial update. Only title, description, priority and tags are
    applied; id/createdAt/completedAt and unknown keys are ignored. A key that
    is present is validated like on creation, so an explicit None is rejected.
    """
    validate_task(task)

    changes = {name: clean(updates[name]) for name, clean in _UPDATABLE_FIELDS.items() if name in updates}
    return {**task, **changes}  # type: ignore[typeddict-item]


# PUBLIC_INTERFACE
def add_tag(task: Task, tag: Any) -> Task:
    """Append a trimmed tag; DuplicateTagError on a case-insensitive collision."""
    validate_task(task)
    if not isinstance(tag, str) or tag.strip() == "":
        raise TaskValidationError("Tag must be a non-empty string")

    trimmed = tag.strip()
    tags = list(task.get("tags") or [])
    if trimmed.lower() in (t.lower() for t in tags):
        raise DuplicateTagError(trimmed)
    return {**task, "tags": [*tags, trimmed]}


# PUBLIC_INTERFACE
def remove_tag(task: Task, tag: Any) -> Task:
    """Drop the first tag equal to ``tag`` ignoring case; TagNotFoundError if none matches."""
    validate_task(task)
    if not isinstance(tag, str):
        raise TaskValidationError("Tag must be a string")

    wanted = tag.strip().lower()
    tags = list(task.get("tags") or [])
    for index, existing in enumerate(tags):
        if existing.lower() == wanted:
            return {**task, "tags": tags[:index] + tags[index + 1:]}
    raise TagNotFoundError(tag.strip())
