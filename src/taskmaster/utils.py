from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# PUBLIC_INTERFACE
def generate_id() -> str:
    """Return a new opaque task identifier (random UUID4 string)."""
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
def utc_now_iso() -> str:
    """
    Current UTC time as an ISO8601 string with millisecond precision and a 'Z'
    suffix, e.g. '2025-10-12T10:00:00.000Z'.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: Any) -> Optional[datetime]:
    """
    Parse an ISO8601 timestamp (a trailing 'Z' is accepted). Returns None for
    anything that is not a parseable string; naive values are taken as UTC.
    """
    if not isinstance(value, str):
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# PUBLIC_INTERFACE
def envelope(data: Any) -> Dict[str, Any]:
    """
    Wrap a successful payload the way every data endpoint responds.

    Returns:
        Dict with keys: success (True), data.
    """
    return {"success": True, "data": data}


# PUBLIC_INTERFACE
def message_envelope(message: str, count: Optional[int] = None) -> Dict[str, Any]:
    """Success body for endpoints that report an action instead of returning data."""
    body: Dict[str, Any] = {"success": True, "message": message}
    if count is not None:
        body["count"] = int(count)
    return body


def error_body(kind: str, message: str) -> Dict[str, Any]:
    return {"success": False, "error": kind, "message": message}
