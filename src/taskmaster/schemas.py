from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Request schemas only describe the shape of the body. Business rules (empty
# titles, unknown priorities, duplicate tags) are enforced by the task model
# so that the API and the core report the same errors.


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": "high",
                "tags": ["shopping", "urgent"],
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Task title (required, trimmed)")
    description: Optional[str] = Field(default=None, description="Optional description")
    priority: Optional[str] = Field(default=None, description="low, medium (default) or high")
    tags: Optional[List[Any]] = Field(default=None, description="Tags; duplicates ignoring case are rejected")


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for updating an existing task.
    All fields are optional; only fields present in the body are applied.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "priority": "medium",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="New title")
    description: Optional[str] = Field(default=None, description="New description")
    priority: Optional[str] = Field(default=None, description="low, medium or high")
    tags: Optional[List[Any]] = Field(default=None, description="Replacement tag list")


class TagCreate(BaseModel):
    tag: Optional[str] = Field(default=None, description="Tag to add")


class ImportRequest(BaseModel):
    """
    Body of POST /api/import: the task array to load and whether to append it
    to the current collection instead of replacing it.
    """

    data: Any = Field(default=None, description="Array of task records")
    merge: bool = Field(default=False, description="Append instead of replace")


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task. Wire names are camelCase.

    Imported records are stored without re-validation, so every field is
    optional and untyped and unknown keys pass through. Routes serialize with
    ``response_model_exclude_unset`` so a record comes back with exactly the
    keys it was stored with.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": "high",
                "tags": ["shopping"],
                "completed": False,
                "createdAt": "2025-10-12T10:00:00.000Z",
                "completedAt": None,
            }
        },
    )

    id: Any = Field(default=None, description="Unique identifier of the task (string)")
    title: Any = Field(default=None, description="Task title (string)")
    description: Any = Field(default=None, description="Task description (string)")
    priority: Any = Field(default=None, description="low, medium or high")
    tags: Any = Field(default=None, description="Task tags (array of strings)")
    completed: Any = Field(default=None, description="Completion status flag (boolean)")
    created_at: Any = Field(default=None, alias="createdAt", description="Creation timestamp (ISO8601, UTC)")
    completed_at: Any = Field(
        default=None, alias="completedAt", description="Completion timestamp, null while open"
    )


class TaskStatsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    incomplete: int
    by_priority: Dict[str, int] = Field(..., alias="byPriority")
    by_tag: Dict[str, int] = Field(..., alias="byTag")


class TaskEnvelope(BaseModel):
    success: bool = True
    data: TaskOut


class TaskListEnvelope(BaseModel):
    success: bool = True
    data: List[TaskOut]


class StatsEnvelope(BaseModel):
    success: bool = True
    data: TaskStatsOut


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
    count: Optional[int] = None
