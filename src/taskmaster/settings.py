from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root log level name (default: INFO)
    - LOG_FILE: optional path of a log file written in addition to stderr
    - STATIC_DIR: optional directory of browser assets mounted at '/'
    - HOST / PORT: bind address used by `python -m src.taskmaster` (default 127.0.0.1:3000)
    """

    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    log_file: Optional[str] = None
    static_dir: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _get_optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _parse_port(value: str, default: int = DEFAULT_PORT) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    if not (0 < port < 65536):
        return default
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # main maps this to allow_origins=["*"] and turns allow_credentials off
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        log_file=_get_optional_env("LOG_FILE"),
        static_dir=_get_optional_env("STATIC_DIR"),
        host=_get_env("HOST", DEFAULT_HOST).strip(),
        port=_parse_port(_get_env("PORT", str(DEFAULT_PORT))),
    )
