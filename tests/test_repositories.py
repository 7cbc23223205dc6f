"""Tests for JSON storage and the task/category repositories."""

import json
from datetime import UTC, datetime

from taskman.domain.category import Category
from taskman.domain.shared import Err, Ok, PersistenceError
from taskman.domain.task import Priority, Status, Task
from taskman.infrastructure.storage import JsonCategoryRepository, JsonStorage, JsonTaskRepository


class TestJsonStorage:
    """Tests for JsonStorage load/save."""

    def test_roundtrip_creates_parent_dirs(self, tmp_path):
        storage = JsonStorage()
        path = tmp_path / "nested" / "dir" / "data.json"

        assert isinstance(storage.save_json(path, {"a": [1, 2]}), Ok)
        assert storage.load_json(path) == Ok({"a": [1, 2]})

    def test_missing_file_is_error(self, tmp_path):
        result = JsonStorage().load_json(tmp_path / "missing.json")

        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)

    def test_invalid_json_is_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        result = JsonStorage().load_json(path)

        assert isinstance(result, Err)
        assert "Invalid JSON" in str(result.error)
        assert result.error.path == path

    def test_non_object_is_error(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert isinstance(JsonStorage().load_json(path), Err)

    def test_unserializable_data_leaves_file_untouched(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"keep": true}', encoding="utf-8")

        result = JsonStorage().save_json(path, {"bad": object()})

        assert isinstance(result, Err)
        assert json.loads(path.read_text(encoding="utf-8")) == {"keep": True}


class TestJsonTaskRepository:
    """Tests for JsonTaskRepository."""

    def test_missing_file_means_no_tasks(self, task_repository):
        assert task_repository.find_all() == Ok([])
        assert task_repository.count() == Ok(0)
        assert not task_repository.path.exists()

    def test_saved_task_survives_reload(self, task_repository):
        due = datetime(2026, 4, 1, 9, 30, tzinfo=UTC)
        task = Task.create("Buy milk", "2 litres", Priority.HIGH, "cat-1", due)
        task_repository.save(task)

        reloaded = JsonTaskRepository(task_repository.path).find_by_id(task.id)

        assert reloaded == Ok(task)
        assert reloaded.value.due_date == due

    def test_file_layout(self, task_repository):
        task = Task.create("Buy milk")
        task_repository.save(task)

        data = json.loads(task_repository.path.read_text(encoding="utf-8"))

        assert list(data) == ["tasks"]
        assert data["tasks"][0]["id"] == task.id
        assert data["tasks"][0]["status"] == "todo"
        assert data["tasks"][0]["priority"] == "medium"

    def test_upsert_keeps_position(self, task_repository):
        first = Task.create("first")
        second = Task.create("second")
        task_repository.save(first)
        task_repository.save(second)

        task_repository.save(first.with_status(Status.IN_PROGRESS))
        tasks = task_repository.find_all().value

        assert [t.title for t in tasks] == ["first", "second"]
        assert tasks[0].status is Status.IN_PROGRESS
        assert task_repository.count() == Ok(2)

    def test_find_by_id_unknown(self, task_repository):
        assert task_repository.find_by_id("nope") == Ok(None)

    def test_find_by_category_id(self, task_repository):
        task_repository.save(Task.create("a", category_id="work"))
        task_repository.save(Task.create("b", category_id="home"))
        task_repository.save(Task.create("c", category_id="work"))

        found = task_repository.find_by_category_id("work").value

        assert [t.title for t in found] == ["a", "c"]

    def test_delete_by_id(self, task_repository):
        task = Task.create("a")
        task_repository.save(task)

        assert task_repository.delete_by_id(task.id) == Ok(True)
        assert task_repository.delete_by_id(task.id) == Ok(False)
        assert task_repository.find_all() == Ok([])

    def test_delete_all(self, task_repository):
        task_repository.save(Task.create("a"))
        task_repository.save(Task.create("b"))

        task_repository.delete_all()

        assert task_repository.count() == Ok(0)

    def test_corrupt_file_is_error(self, task_repository):
        task_repository.path.write_text("{oops", encoding="utf-8")

        assert isinstance(task_repository.find_all(), Err)
        assert isinstance(task_repository.save(Task.create("a")), Err)
        assert task_repository.path.read_text(encoding="utf-8") == "{oops"

    def test_invalid_record_is_error(self, task_repository):
        task_repository.path.write_text('{"tasks": [{"id": "1", "title": ""}]}', encoding="utf-8")

        result = task_repository.find_all()

        assert isinstance(result, Err)
        assert isinstance(result.error, PersistenceError)


class TestJsonCategoryRepository:
    """Tests for JsonCategoryRepository."""

    def test_defaults_seeded_on_first_run(self, tmp_path):
        repository = JsonCategoryRepository(tmp_path / "categories.json")

        names = [c.name for c in repository.find_all().value]

        assert names == ["Work", "Personal", "Shopping", "Health", "Learning"]
        assert repository.path.exists()

    def test_seeded_ids_are_stable(self, tmp_path):
        path = tmp_path / "categories.json"
        first = JsonCategoryRepository(path).find_all().value
        second = JsonCategoryRepository(path).find_all().value

        assert [c.id for c in first] == [c.id for c in second]

    def test_empty_file_is_not_reseeded(self, tmp_path):
        path = tmp_path / "categories.json"
        path.write_text('{"categories": []}', encoding="utf-8")

        assert JsonCategoryRepository(path).find_all() == Ok([])

    def test_no_seeding_when_disabled(self, category_repository):
        assert category_repository.find_all() == Ok([])
        assert not category_repository.path.exists()

    def test_find_by_name_ignores_case(self, category_repository):
        work = Category.create("Work")
        category_repository.save(work)

        assert category_repository.find_by_name("WORK") == Ok(work)
        assert category_repository.find_by_name("play") == Ok(None)

    def test_save_and_delete(self, category_repository):
        work = Category.create("Work")
        category_repository.save(work)
        category_repository.save(work.with_color("#000"))

        assert category_repository.count() == Ok(1)
        assert category_repository.find_by_id(work.id).value.color == "#000"
        assert category_repository.delete_by_id(work.id) == Ok(True)
        assert category_repository.delete_by_id(work.id) == Ok(False)

    def test_non_hex_color_loads(self, category_repository):
        category_repository.path.write_text(
            '{"categories": [{"id": "c1", "name": "Garden", "color": "blue"}]}',
            encoding="utf-8",
        )

        result = category_repository.find_all()

        assert isinstance(result, Ok)
        assert result.value[0].color == "blue"
