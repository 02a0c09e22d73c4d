from __future__ import annotations

import unicodedata
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .errors import TaskValidationError
from .models import PRIORITY_LEVELS, PRIORITY_RANK, SORT_FIELDS, SORT_ORDERS, Task, TaskCriteria
from .utils import parse_iso

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _matches(task: Task, criteria: TaskCriteria) -> bool:
    if criteria.completed is not None and task.get("completed") != criteria.completed:
        return False

    if criteria.priority and task.get("priority") != criteria.priority:
        return False

    if criteria.tag:
        wanted = criteria.tag.lower()
        if not any(t.lower() == wanted for t in task.get("tags") or []):
            return False

    if criteria.search:
        s = criteria.search.lower()
        title_ok = s in (task.get("title") or "").lower()
        desc_ok = s in (task.get("description") or "").lower()
        if not (title_ok or desc_ok):
            return False

    return True


# PUBLIC_INTERFACE
def filter_tasks(tasks: Iterable[Task], criteria: Optional[TaskCriteria] = None) -> List[Task]:
    """
    Return the tasks matching every set criterion, in their original order.

    - completed: exact match on the flag
    - priority: exact match
    - tag: case-insensitive exact match against any tag
    - search: case-insensitive substring of title or description
    """
    c = criteria or TaskCriteria()
    return [t for t in tasks if _matches(t, c)]


def _collation_key(text: Any) -> tuple:
    """
    Locale-style title ordering: compare accent- and case-folded text first,
    then the raw text so 'a' and 'A' still have a deterministic order.
    """
    s = text if isinstance(text, str) else ""
    decomposed = unicodedata.normalize("NFKD", s)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), s.swapcase())


def _created_key(task: Task) -> tuple:
    # Unparseable timestamps (only possible through import) sort after valid ones
    ts = parse_iso(task.get("createdAt"))
    return (ts is None, ts or _EPOCH)


# PUBLIC_INTERFACE
def sort_tasks(tasks: Iterable[Task], sort_by: Optional[str] = "createdAt", order: str = "asc") -> List[Task]:
    """
    Return a new list sorted by createdAt (default), priority or title.

    Unknown sort fields fall back to createdAt. Ties keep their input order in
    both directions since ``sorted`` is stable with ``reverse=True`` as well.

    Raises:
        TaskValidationError: if order is not 'asc' or 'desc'.
    """
    if order not in SORT_ORDERS:
        raise TaskValidationError('Order must be "asc" or "desc"')

    field = sort_by if sort_by in SORT_FIELDS else "createdAt"
    if field == "priority":
        key = lambda t: PRIORITY_RANK.get(t.get("priority"), 0)  # noqa: E731
    elif field == "title":
        key = lambda t: _collation_key(t.get("title"))  # noqa: E731
    else:
        key = _created_key

    return sorted(tasks, key=key, reverse=(order == "desc"))


# PUBLIC_INTERFACE
def task_stats(tasks: Iterable[Task]) -> Dict[str, Any]:
    """
    Aggregate counts over the whole collection.

    Returns:
        Dict with keys: total, completed, incomplete, byPriority
        ({low, medium, high}) and byTag (tag -> occurrences, original casing).
    """
    items = list(tasks)
    completed = sum(1 for t in items if t.get("completed"))
    by_priority = {level: 0 for level in PRIORITY_LEVELS}
    by_tag: Dict[str, int] = {}

    for t in items:
        if t.get("priority") in by_priority:
            by_priority[t["priority"]] += 1
        for tag in t.get("tags") or []:
            by_tag[tag] = by_tag.get(tag, 0) + 1

    return {
        "total": len(items),
        "completed": completed,
        "incomplete": len(items) - completed,
        "byPriority": by_priority,
        "byTag": by_tag,
    }
