"""
Utility script to generate and write the OpenAPI schema for the TaskMaster app.

The schema is serialized to interfaces/openapi.json so that API clients and
documentation tools can consume a stable contract without running the server.

Usage:
    python -m src.taskmaster.generate_openapi [output-path]

Notes:
- Every tag declared in main.openapi_tags is guaranteed to be present.
- Default output path is relative to the repository root: interfaces/openapi.json
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List, Optional

from .main import create_app, openapi_tags
from .settings import Settings


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema contains the expected tags metadata. Existing tag
    definitions are kept; missing ones are appended.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


def default_output_path() -> str:
    # <repo_root>/interfaces/openapi.json
    script_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # points to .../src
    repo_root = os.path.dirname(script_dir)
    return os.path.join(repo_root, "interfaces", "openapi.json")


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """
    Generate the OpenAPI schema and write it to ``out_path`` (default
    interfaces/openapi.json), creating directories as needed.

    Returns:
        The path of the written file.
    """
    # Default settings: the schema must not depend on the caller's environment
    schema = create_app(Settings()).openapi()
    _ensure_tags(schema)

    path = out_path or default_output_path()
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return path


def main() -> None:
    path = generate_openapi(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"Wrote OpenAPI schema to: {path}")


if __name__ == "__main__":
    main()
