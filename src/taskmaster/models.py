from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, TypedDict

Priority = Literal["low", "medium", "high"]

PRIORITY_LEVELS: Tuple[str, ...] = ("low", "medium", "high")

# Sort rank; low < medium < high
PRIORITY_RANK = {level: rank for rank, level in enumerate(PRIORITY_LEVELS, start=1)}

SORT_FIELDS = ("createdAt", "priority", "title")
SORT_ORDERS = ("asc", "desc")

# Canonical key order of a task record (also the JSON export order)
TASK_FIELDS = (
    "id",
    "title",
    "description",
    "priority",
    "tags",
    "completed",
    "createdAt",
    "completedAt",
)


# PUBLIC_INTERFACE
class Task(TypedDict):
    """
    A single to-do record. Records are treated as immutable snapshots: every
    mutation builds a new dict that replaces the old one in the collection.

    Fields:
    - id: Opaque unique identifier (UUID4 string), never reassigned
    - title: Trimmed, non-empty title
    - description: Trimmed description, '' when not given
    - priority: 'low' | 'medium' | 'high'
    - tags: Trimmed tags, no case-insensitive duplicates
    - completed: Completion flag
    - createdAt: ISO8601 UTC timestamp, e.g. '2025-10-12T10:00:00.000Z'
    - completedAt: Timestamp of completion, None while open
    """

    id: str
    title: str
    description: str
    priority: Priority
    tags: List[str]
    completed: bool
    createdAt: str
    completedAt: Optional[str]


@dataclass(frozen=True)
class TaskCriteria:
    """
    Filter criteria. Unset keys (None or '') impose no constraint; set keys are ANDed.
    """
    completed: Optional[bool] = None
    priority: Optional[str] = None
    tag: Optional[str] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ListQuery:
    """
    Options for TaskManager.list: filter criteria plus optional sorting.
    Sorting only happens when sort_by is set; order then defaults to 'asc'.
    """
    criteria: TaskCriteria = field(default_factory=TaskCriteria)
    sort_by: Optional[str] = None  # allowed: createdAt, priority, title
    order: Optional[str] = None  # allowed: asc, desc
