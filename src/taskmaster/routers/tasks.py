from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_task_manager
from ..errors import TaskValidationError
from ..manager import TaskManager
from ..models import ListQuery, TaskCriteria
from ..schemas import MessageEnvelope, TagCreate, TaskCreate, TaskEnvelope, TaskListEnvelope, TaskUpdate
from ..utils import envelope, message_envelope

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TaskListEnvelope,
    response_model_exclude_unset=True,
    summary="List Tasks",
    description=(
        "List tasks with optional filters and sorting.\n\n"
        "Query parameters:\n"
        "- completed: 'true' lists completed tasks, any other value lists open ones\n"
        "- priority: low, medium or high\n"
        "- tag: tasks carrying this tag (case-insensitive)\n"
        "- search: substring of title or description (case-insensitive)\n"
        "- sortBy: createdAt, priority or title (no sorting when omitted)\n"
        "- order: asc (default) or desc"
    ),
    responses={
        200: {"description": "List retrieved successfully"},
        400: {"description": "Invalid query parameters"},
    },
)
async def list_tasks(
    completed: Optional[str] = Query(None, description="'true' for completed tasks, anything else for open ones"),
    priority: Optional[str] = Query(None, description="Filter by priority"),
    tag: Optional[str] = Query(None, description="Filter by tag"),
    search: Optional[str] = Query(None, description="Search text for title/description"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="createdAt, priority or title"),
    order: Optional[str] = Query(None, description="Sort direction: 'asc' or 'desc'"),
    manager: TaskManager = Depends(get_task_manager),
) -> TaskListEnvelope:
    """
    List tasks in collection order, or sorted when sortBy is given.
    """
    # Only the exact string 'true' selects completed tasks
    completed_flag = None if completed is None else completed == "true"
    query = ListQuery(
        criteria=TaskCriteria(completed=completed_flag, priority=priority, tag=tag, search=search),
        sort_by=sort_by,
        order=order,
    )
    return envelope(manager.list(query))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new task and return it.",
    responses={
        201: {"description": "Task created successfully"},
        400: {"description": "Validation error"},
    },
)
async def create_task(payload: TaskCreate, manager: TaskManager = Depends(get_task_manager)) -> TaskEnvelope:
    """
    Create a new task. Title is required; description, priority and tags are optional.
    """
    if not payload.title:
        raise TaskValidationError("Title is required")
    task = manager.add(
        payload.title,
        description=payload.description or "",
        priority=payload.priority or "medium",
        tags=payload.tags,
    )
    return envelope(task)  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.delete(
    "",
    response_model=MessageEnvelope,
    summary="Clear Tasks",
    description="Delete every task.",
)
async def clear_tasks(manager: TaskManager = Depends(get_task_manager)) -> MessageEnvelope:
    """
    Remove all tasks and report how many were removed.
    """
    count = manager.clear()
    return message_envelope(f"Cleared {count} tasks", count=count)  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
async def get_task(task_id: str, manager: TaskManager = Depends(get_task_manager)) -> TaskEnvelope:
    return envelope(manager.get(task_id))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Update Task",
    description="Update title, description, priority and/or tags. Omitted fields are left as they are.",
    responses={
        200: {"description": "Task updated"},
        400: {"description": "Validation error"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: str, payload: TaskUpdate, manager: TaskManager = Depends(get_task_manager)
) -> TaskEnvelope:
    """
    Partial update: only the fields present in the body are applied.
    """
    updates = payload.model_dump(exclude_unset=True)
    return envelope(manager.update(task_id, updates))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    response_model=MessageEnvelope,
    response_model_exclude_none=True,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={
        200: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(task_id: str, manager: TaskManager = Depends(get_task_manager)) -> MessageEnvelope:
    manager.remove(task_id)
    return message_envelope("Task deleted")  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/complete",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Complete Task",
    responses={
        200: {"description": "Task completed"},
        400: {"description": "Task already completed"},
        404: {"description": "Task not found"},
    },
)
async def complete_task(task_id: str, manager: TaskManager = Depends(get_task_manager)) -> TaskEnvelope:
    return envelope(manager.complete(task_id))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/reopen",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Reopen Task",
    responses={
        200: {"description": "Task reopened"},
        400: {"description": "Task is not completed"},
        404: {"description": "Task not found"},
    },
)
async def reopen_task(task_id: str, manager: TaskManager = Depends(get_task_manager)) -> TaskEnvelope:
    return envelope(manager.reopen(task_id))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/tags",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Add Tag",
    responses={
        200: {"description": "Tag added"},
        400: {"description": "Empty or duplicate tag"},
        404: {"description": "Task not found"},
    },
)
async def add_tag(
    task_id: str, payload: TagCreate, manager: TaskManager = Depends(get_task_manager)
) -> TaskEnvelope:
    if not payload.tag:
        raise TaskValidationError("Tag is required")
    return envelope(manager.add_tag(task_id, payload.tag))  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}/tags/{tag}",
    response_model=TaskEnvelope,
    response_model_exclude_unset=True,
    summary="Remove Tag",
    responses={
        200: {"description": "Tag removed"},
        404: {"description": "Task or tag not found"},
    },
)
async def remove_tag(task_id: str, tag: str, manager: TaskManager = Depends(get_task_manager)) -> TaskEnvelope:
    return envelope(manager.remove_tag(task_id, tag))  # type: ignore[return-value]
