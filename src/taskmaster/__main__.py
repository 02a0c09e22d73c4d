"""
Run the TaskMaster backend.

Usage:
    python -m src.taskmaster

HOST, PORT, LOG_LEVEL, LOG_FILE, STATIC_DIR and CORS_ALLOW_ORIGINS are read
from the environment (see settings.py).
"""
from __future__ import annotations

import logging

import uvicorn

from .logging_setup import setup_logging
from .main import create_app
from .settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(level=settings.log_level, log_file=settings.log_file)

    logger.info("Starting TaskMaster backend on http://%s:%d (API under /api)", settings.host, settings.port)
    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
