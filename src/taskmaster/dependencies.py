from __future__ import annotations

from fastapi import Request

from .manager import TaskManager


# PUBLIC_INTERFACE
def get_task_manager(request: Request) -> TaskManager:
    """
    FastAPI dependency returning the application's single TaskManager.

    Routes using it are declared ``async def``: manager calls then run on the
    event loop thread without awaiting, which serializes access to the
    collection.
    """
    return request.app.state.task_manager
