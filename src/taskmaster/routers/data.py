from __future__ import annotations

import json

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from ..dependencies import get_task_manager
from ..errors import TaskValidationError
from ..manager import TaskManager
from ..schemas import ImportRequest, MessageEnvelope, StatsEnvelope
from ..utils import envelope, message_envelope

router = APIRouter(prefix="/api", tags=["data"])


def _attachment(content: str, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# PUBLIC_INTERFACE
@router.get(
    "/stats",
    response_model=StatsEnvelope,
    summary="Task Statistics",
    description="Totals, completion counts, counts per priority and per tag.",
)
async def get_stats(manager: TaskManager = Depends(get_task_manager)) -> StatsEnvelope:
    return envelope(manager.get_stats())  # type: ignore[return-value]


# PUBLIC_INTERFACE
@router.get(
    "/export/json",
    summary="Export JSON",
    description="Download all tasks as a JSON array (tasks.json).",
    response_class=Response,
    responses={200: {"content": {"application/json": {}}}},
)
async def export_json(manager: TaskManager = Depends(get_task_manager)) -> Response:
    return _attachment(manager.export_json(), "application/json", "tasks.json")


# PUBLIC_INTERFACE
@router.get(
    "/export/csv",
    summary="Export CSV",
    description="Download all tasks as CSV (tasks.csv).",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_csv(manager: TaskManager = Depends(get_task_manager)) -> Response:
    return _attachment(manager.export_csv(), "text/csv", "tasks.csv")


# PUBLIC_INTERFACE
@router.post(
    "/import",
    response_model=MessageEnvelope,
    summary="Import Tasks",
    description=(
        "Load tasks from a JSON array given in `data`. With `merge: true` the tasks are "
        "appended, otherwise they replace the whole collection. Records are not re-validated."
    ),
    responses={
        200: {"description": "Tasks imported"},
        400: {"description": "Missing data or data is not an array"},
    },
)
async def import_tasks(payload: ImportRequest, manager: TaskManager = Depends(get_task_manager)) -> MessageEnvelope:
    if payload.data is None:
        raise TaskValidationError("Data is required")
    count = manager.import_json(json.dumps(payload.data), merge=payload.merge)
    return message_envelope(f"Imported {count} tasks", count=count)  # type: ignore[return-value]
