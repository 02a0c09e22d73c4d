import logging

import pytest

from src.taskmaster.errors import (
    DuplicateTagError,
    ImportFormatError,
    TagNotFoundError,
    TaskNotFoundError,
    TaskStateError,
    TaskValidationError,
)
from src.taskmaster.manager import TaskManager
from src.taskmaster.models import ListQuery, TaskCriteria


class TestCrud:
    def test_add_and_find(self, manager: TaskManager):
        task = manager.add("Buy groceries", priority="high")
        assert manager.count() == 1
        assert manager.find_by_id(task["id"]) == task
        assert manager.get(task["id"]) == task

    def test_find_unknown_returns_none(self, manager: TaskManager):
        assert manager.find_by_id("nope") is None

    @pytest.mark.parametrize(
        "call",
        [
            lambda m: m.get("missing-id"),
            lambda m: m.remove("missing-id"),
            lambda m: m.complete("missing-id"),
            lambda m: m.reopen("missing-id"),
            lambda m: m.update("missing-id", {"title": "x"}),
            lambda m: m.add_tag("missing-id", "x"),
            lambda m: m.remove_tag("missing-id", "x"),
        ],
    )
    def test_unknown_id_raises_not_found(self, manager: TaskManager, call):
        manager.add("Existing")
        with pytest.raises(TaskNotFoundError) as exc:
            call(manager)
        assert exc.value.task_id == "missing-id"
        assert "missing-id" in exc.value.message

    def test_remove(self, manager: TaskManager):
        keep = manager.add("Keep")
        drop = manager.add("Drop")
        removed = manager.remove(drop["id"])
        assert removed["id"] == drop["id"]
        assert [t["id"] for t in manager.list()] == [keep["id"]]

    def test_add_invalid_leaves_collection_unchanged(self, manager: TaskManager):
        with pytest.raises(TaskValidationError):
            manager.add("   ")
        assert manager.count() == 0

    def test_returned_tasks_are_copies(self, manager: TaskManager):
        task = manager.add("Original", tags=["a"])
        task["title"] = "changed"
        task["tags"].append("b")
        stored = manager.get(task["id"])
        assert stored["title"] == "Original"
        assert stored["tags"] == ["a"]


class TestMutations:
    def test_complete_and_reopen_replace_in_place(self, manager: TaskManager):
        first = manager.add("First")
        second = manager.add("Second")
        done = manager.complete(second["id"])
        assert done["completed"] is True and done["completedAt"]
        assert [t["id"] for t in manager.list()] == [first["id"], second["id"]]
        reopened = manager.reopen(second["id"])
        assert reopened == second

    def test_failed_mutation_keeps_snapshot(self, manager: TaskManager):
        task = manager.add("Stable", tags=["Urgent"])
        with pytest.raises(TaskStateError):
            manager.reopen(task["id"])
        with pytest.raises(DuplicateTagError):
            manager.add_tag(task["id"], "urgent")
        with pytest.raises(TaskValidationError):
            manager.update(task["id"], {"priority": "asap"})
        with pytest.raises(TagNotFoundError):
            manager.remove_tag(task["id"], "missing")
        assert manager.get(task["id"]) == task

    def test_update(self, manager: TaskManager):
        task = manager.add("Draft")
        updated = manager.update(task["id"], {"title": "Final", "id": "other"})
        assert updated["title"] == "Final"
        assert updated["id"] == task["id"]

    def test_tags(self, manager: TaskManager):
        task = manager.add("Tagged")
        manager.add_tag(task["id"], "Work")
        manager.add_tag(task["id"], "home")
        assert manager.remove_tag(task["id"], "WORK")["tags"] == ["home"]


class TestQueries:
    def test_list_without_sort_keeps_insertion_order(self, manager: TaskManager):
        titles = ["c", "a", "b"]
        for t in titles:
            manager.add(t)
        assert [t["title"] for t in manager.list()] == titles
        # order alone does not trigger sorting
        assert [t["title"] for t in manager.list(ListQuery(order="desc"))] == titles

    def test_list_filter_and_sort(self, manager: TaskManager):
        manager.add("b high", priority="high")
        manager.add("low", priority="low")
        manager.add("a high", priority="high")
        query = ListQuery(criteria=TaskCriteria(priority="high"), sort_by="title")
        assert [t["title"] for t in manager.list(query)] == ["a high", "b high"]

    def test_list_invalid_order(self, manager: TaskManager):
        manager.add("x")
        with pytest.raises(TaskValidationError):
            manager.list(ListQuery(sort_by="title", order="up"))

    def test_search(self, manager: TaskManager):
        manager.add("Buy milk", description="from the store")
        manager.add("Call mom")
        assert [t["title"] for t in manager.search("STORE")] == ["Buy milk"]

    @pytest.mark.parametrize("query", ["", None, 3])
    def test_search_requires_text(self, manager: TaskManager, query):
        with pytest.raises(TaskValidationError):
            manager.search(query)

    def test_stats(self, manager: TaskManager):
        manager.add("Low priority task", priority="low")
        medium = manager.add("Medium priority task", priority="medium")
        manager.add("High priority task", priority="high")
        manager.complete(medium["id"])
        stats = manager.get_stats()
        assert (stats["total"], stats["completed"], stats["incomplete"]) == (3, 1, 2)
        assert stats["byPriority"] == {"low": 1, "medium": 1, "high": 1}


class TestImportExport:
    def test_import_replaces_by_default(self, manager: TaskManager):
        source = TaskManager()
        source.add("Imported 1")
        source.add("Imported 2")
        manager.add("Existing")

        assert manager.import_json(source.export_json()) == 2
        assert [t["title"] for t in manager.list()] == ["Imported 1", "Imported 2"]

    def test_import_merge_appends(self, manager: TaskManager):
        source = TaskManager()
        source.add("Imported")
        manager.add("Existing")

        assert manager.import_json(source.export_json(), merge=True) == 1
        assert [t["title"] for t in manager.list()] == ["Existing", "Imported"]

    def test_imported_tasks_are_addressable(self, manager: TaskManager):
        source = TaskManager()
        task = source.add("Imported")
        manager.import_json(source.export_json())
        assert manager.complete(task["id"])["completed"] is True

    def test_bad_import_leaves_collection(self, manager: TaskManager):
        manager.add("Existing")
        with pytest.raises(ImportFormatError):
            manager.import_json('{"not": "a list"}')
        assert manager.count() == 1

    def test_export_csv_empty(self, manager: TaskManager):
        assert manager.export_csv() == "id,title,description,priority,completed,tags,createdAt,completedAt\n"

    def test_clear(self, manager: TaskManager):
        manager.add("a")
        manager.add("b")
        assert manager.clear() == 2
        assert manager.count() == 0
        assert manager.list() == []


def test_logs_additions(manager: TaskManager, caplog):
    with caplog.at_level(logging.INFO, logger="src.taskmaster.manager"):
        task = manager.add("Logged")
    assert any(task["id"] in r.getMessage() for r in caplog.records)
