from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

APP_LOGGER_PREFIX = "src.taskmaster"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow all taskmaster logs
    - allow uvicorn startup/access logs at INFO+
    - suppress other third-party logs and captured warnings unless WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == APP_LOGGER_PREFIX or name.startswith(APP_LOGGER_PREFIX + "."):
            return True

        if name == "uvicorn" or name.startswith("uvicorn."):
            return record.levelno >= logging.INFO

        return record.levelno >= logging.WARNING


def _to_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# PUBLIC_INTERFACE
def setup_logging(
    *,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure the root logger with:
    - Console handler on stderr, filtered for interactive use
    - Optional file handler with the full, unfiltered log at the same level

    Call this ONCE, before the server starts.
    """
    root_level = _to_level(level)
    root = logging.getLogger()
    root.setLevel(root_level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(root_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(path), encoding="utf-8")
        fh.setLevel(root_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
