"""
JSON/CSV export and JSON import of task collections.

The export formats are consumed by other tools, so they are kept exact:
JSON is a 2-space indented array; CSV always quotes title, description and
tags (only title and description double their inner quotes) and renders
booleans in lowercase.
"""
from __future__ import annotations

import json
from typing import Any, Iterable, List

from .errors import ImportFormatError
from .models import Task

CSV_HEADER = "id,title,description,priority,completed,tags,createdAt,completedAt"


def _quote(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _csv_row(task: Task) -> str:
    completed = task.get("completed")
    return ",".join(
        [
            str(task.get("id", "")),
            _quote(task.get("title")),
            _quote(task.get("description")),
            str(task.get("priority", "")),
            ("true" if completed else "false") if isinstance(completed, bool) else str(completed),
            # tags are wrapped in quotes but inner quotes are left as-is
            '"' + ", ".join(task.get("tags") or []) + '"',
            str(task.get("createdAt", "")),
            task.get("completedAt") or "",
        ]
    )


# PUBLIC_INTERFACE
def export_json(tasks: Iterable[Task]) -> str:
    """Serialize tasks as a pretty-printed JSON array."""
    return json.dumps(list(tasks), indent=2, ensure_ascii=False)


# PUBLIC_INTERFACE
def export_csv(tasks: Iterable[Task]) -> str:
    """
    Serialize tasks as CSV with the header
    ``id,title,description,priority,completed,tags,createdAt,completedAt``.

    Rows are joined with '\\n' and carry no trailing newline; an empty
    collection yields the header followed by a single '\\n'.
    """
    rows = [_csv_row(t) for t in tasks]
    if not rows:
        return CSV_HEADER + "\n"
    return "\n".join([CSV_HEADER, *rows])


# PUBLIC_INTERFACE
def import_json(text: Any) -> List[Task]:
    """
    Parse a JSON array of task records.

    Records are returned as parsed; they are not checked against the task
    invariants.

    Raises:
        ImportFormatError: if text is not a string, not valid JSON, or not an array.
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise ImportFormatError("Input must be a string")
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ImportFormatError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ImportFormatError("Invalid JSON: JSON must contain an array of tasks")
    return data
