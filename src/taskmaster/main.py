from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .errors import NotFoundError, TaskError
from .manager import TaskManager
from .routers import data as data_router
from .routers import tasks as tasks_router
from .settings import Settings, get_settings
from .utils import error_body

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "tasks",
        "description": "CRUD operations for tasks, completion state and tags, with filtering and sorting.",
    },
    {"name": "data", "description": "Statistics, JSON/CSV export and JSON import."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application with its own, empty TaskManager.

    Args:
        settings: Explicit settings; read from the environment when omitted.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="TaskMaster Backend",
        description="In-memory task list service with filtering, statistics and JSON/CSV export.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    application.state.task_manager = TaskManager()

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.exception_handler(TaskError)
    async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
        """
        Map domain errors to JSON: NotFoundError -> 404, every other kind -> 400.

        Response format:
            {"success": false, "error": "<kind>", "message": "<text>"}
        """
        status_code = 404 if isinstance(exc, NotFoundError) else 400
        logger.debug("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
        return JSONResponse(status_code=status_code, content=error_body(exc.kind, exc.message))

    # Global exception handlers for consistent JSON on validation errors
    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "success": false,
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        content = error_body("ValidationError", "Request validation failed")
        content["detail"] = exc.errors()
        return JSONResponse(status_code=422, content=content)

    @application.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body("InternalServerError", "Internal server error"))

    # PUBLIC_INTERFACE
    @application.get("/api/health", summary="Health Check", tags=["health"])
    async def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and the current task count.
        """
        return {"message": "Healthy", "tasks": request.app.state.task_manager.count()}

    # Include routers
    application.include_router(tasks_router.router)
    application.include_router(data_router.router)

    # Static browser assets last, so /api routes take precedence
    if settings.static_dir:
        if os.path.isdir(settings.static_dir):
            application.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        else:
            logger.warning("STATIC_DIR %s is not a directory; static files disabled", settings.static_dir)

    return application


app = create_app()
