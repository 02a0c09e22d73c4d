from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import TaskNotFoundError, TaskValidationError
from .models import ListQuery, Task, TaskCriteria
from .queries import filter_tasks, sort_tasks, task_stats
from .serialization import export_csv, export_json, import_json
from .tasks import add_tag, complete_task, create_task, remove_tag, reopen_task, update_task

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TaskManager:
    """
    In-memory, insertion-ordered task collection.

    Mutations build a new snapshot with the functions in ``tasks.py`` and
    replace the stored record at the same index, so a failed validation leaves
    the collection unchanged. Returned tasks are copies.

    Not thread-safe: callers sharing one instance must serialize access.
    """

    def __init__(self) -> None:
        self._tasks: List[Task] = []

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if isinstance(t, Mapping) and t.get("id") == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _apply(self, task_id: str, operation: Callable[[Task], Task]) -> Task:
        index = self._index_of(task_id)
        updated = operation(self._tasks[index])
        self._tasks[index] = updated
        logger.debug("Replaced snapshot of task %s", task_id)
        return copy.deepcopy(updated)

    def add(
        self,
        title: Any,
        description: Any = "",
        priority: Any = "medium",
        tags: Optional[Any] = None,
    ) -> Task:
        """Create a task and append it to the collection."""
        task = create_task(title, description=description, priority=priority, tags=tags)
        self._tasks.append(task)
        logger.info("Added task %s", task["id"])
        return copy.deepcopy(task)

    def find_by_id(self, task_id: str) -> Optional[Task]:
        """Return a copy of the task, or None if no task has this id."""
        try:
            return copy.deepcopy(self._tasks[self._index_of(task_id)])
        except TaskNotFoundError:
            return None

    def get(self, task_id: str) -> Task:
        """Like find_by_id, but raises TaskNotFoundError for an unknown id."""
        return copy.deepcopy(self._tasks[self._index_of(task_id)])

    def remove(self, task_id: str) -> Task:
        """Delete a task and return the removed record."""
        removed = self._tasks.pop(self._index_of(task_id))
        logger.info("Removed task %s", task_id)
        return removed

    def complete(self, task_id: str) -> Task:
        return self._apply(task_id, complete_task)

    def reopen(self, task_id: str) -> Task:
        return self._apply(task_id, reopen_task)

    def update(self, task_id: str, updates: Mapping[str, Any]) -> Task:
        return self._apply(task_id, lambda t: update_task(t, updates))

    def add_tag(self, task_id: str, tag: Any) -> Task:
        return self._apply(task_id, lambda t: add_tag(t, tag))

    def remove_tag(self, task_id: str, tag: Any) -> Task:
        return self._apply(task_id, lambda t: remove_tag(t, tag))

    def list(self, query: Optional[ListQuery] = None) -> List[Task]:
        """
        Return tasks matching the query's criteria, sorted only when
        query.sort_by is set ('asc' unless query.order says otherwise).
        """
        q = query or ListQuery()
        result = filter_tasks(self._tasks, q.criteria)
        if q.sort_by:
            result = sort_tasks(result, q.sort_by, q.order or "asc")
        return copy.deepcopy(result)

    def search(self, query: Any) -> List[Task]:
        """Case-insensitive text search over titles and descriptions."""
        if not isinstance(query, str) or not query:
            raise TaskValidationError("Search query must be a non-empty string")
        return copy.deepcopy(filter_tasks(self._tasks, TaskCriteria(search=query)))

    def get_stats(self) -> Dict[str, Any]:
        return task_stats(self._tasks)

    def export_json(self) -> str:
        return export_json(self._tasks)

    def export_csv(self) -> str:
        return export_csv(self._tasks)

    def import_json(self, text: Any, merge: bool = False) -> int:
        """
        Load tasks from a JSON array. ``merge`` appends to the collection,
        otherwise the collection is replaced. Returns the number of records read.
        """
        imported = import_json(text)
        if merge:
            self._tasks.extend(imported)
        else:
            self._tasks = imported
        logger.info("Imported %d tasks (merge=%s)", len(imported), merge)
        return len(imported)

    def clear(self) -> int:
        """Drop every task; returns how many were removed."""
        count = len(self._tasks)
        self._tasks = []
        logger.info("Cleared %d tasks", count)
        return count

    def count(self) -> int:
        return len(self._tasks)
