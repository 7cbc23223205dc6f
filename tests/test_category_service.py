"""Tests for CategoryService."""

import pytest

from taskman.domain.shared import (
    CategoryNotFoundError,
    DuplicateNameError,
    Err,
    InvalidInputError,
    Ok,
)


class TestCreateCategory:
    """Tests for CategoryService.create_category."""

    def test_create(self, category_service, category_repository):
        category = category_service.create_category("Work", "Job stuff", "#3498db").value

        assert category.name == "Work"
        assert category_repository.find_by_id(category.id) == Ok(category)

    @pytest.mark.parametrize("name", ["work", "WORK", " Work "])
    def test_duplicate_name_any_case(self, category_service, name):
        category_service.create_category("Work")

        result = category_service.create_category(name)

        assert isinstance(result, Err)
        assert isinstance(result.error, DuplicateNameError)
        assert "already exists" in str(result.error)

    def test_blank_name_is_invalid(self, category_service):
        result = category_service.create_category("  ")

        assert isinstance(result.error, InvalidInputError)
        assert str(result.error) == "Category name cannot be blank"

    def test_bad_color_is_invalid(self, category_service, category_repository):
        result = category_service.create_category("Work", color="blue")

        assert isinstance(result.error, InvalidInputError)
        assert category_repository.count() == Ok(0)


class TestUpdateCategory:
    """Tests for renaming and editing categories."""

    def test_rename(self, category_service):
        work = category_service.create_category("Work").value

        renamed = category_service.update_category_name(work.id, "Office")

        assert renamed.value.name == "Office"
        assert renamed.value.id == work.id

    def test_rename_to_own_name_in_other_case(self, category_service):
        work = category_service.create_category("Work").value

        renamed = category_service.update_category_name(work.id, "WORK")

        assert renamed.value.name == "WORK"

    def test_rename_to_taken_name(self, category_service):
        category_service.create_category("Work")
        home = category_service.create_category("Home").value

        result = category_service.update_category_name(home.id, "work")

        assert isinstance(result.error, DuplicateNameError)
        assert category_service.get_category(home.id).value.name == "Home"

    def test_rename_unknown(self, category_service):
        result = category_service.update_category_name("missing", "x")
        assert isinstance(result.error, CategoryNotFoundError)

    def test_update_description_and_color(self, category_service):
        work = category_service.create_category("Work").value

        category_service.update_category_description(work.id, "Office tasks")
        category_service.update_category_color(work.id, "#000000")
        stored = category_service.get_category(work.id).value

        assert stored.description == "Office tasks"
        assert stored.color == "#000000"

    def test_update_bad_color(self, category_service):
        work = category_service.create_category("Work").value

        result = category_service.update_category_color(work.id, "nope")

        assert isinstance(result.error, InvalidInputError)

    def test_update_details_saves_both(self, category_service):
        work = category_service.create_category("Work").value

        updated = category_service.update_category_details(work.id, "Office tasks", "#000")

        assert (updated.value.description, updated.value.color) == ("Office tasks", "#000")
        assert category_service.get_category(work.id) == updated

    def test_update_details_bad_color_saves_nothing(self, category_service):
        work = category_service.create_category("Work", "Job stuff").value

        result = category_service.update_category_details(work.id, "Changed", "nope")

        assert isinstance(result.error, InvalidInputError)
        assert category_service.get_category(work.id) == Ok(work)

    def test_stored_non_hex_color_does_not_block_rename(
        self, category_service, category_repository
    ):
        category_repository.path.write_text(
            '{"categories": [{"id": "c1", "name": "Garden", "color": "blue"}]}',
            encoding="utf-8",
        )

        renamed = category_service.update_category_name("c1", "Yard")

        assert renamed.value.name == "Yard"
        assert renamed.value.color == "blue"


class TestQueriesAndDelete:
    """Tests for category lookups and deletes."""

    def test_get_by_name_ignores_case(self, category_service):
        work = category_service.create_category("Work").value

        assert category_service.get_category_by_name("wOrK") == Ok(work)
        assert isinstance(
            category_service.get_category_by_name("Play").error, CategoryNotFoundError
        )

    def test_get_all(self, category_service):
        category_service.create_category("Work")
        category_service.create_category("Home")

        names = [c.name for c in category_service.get_all_categories().value]

        assert names == ["Work", "Home"]

    def test_delete(self, category_service):
        work = category_service.create_category("Work").value

        assert category_service.delete_category(work.id) == Ok(True)
        assert category_service.delete_category(work.id) == Ok(False)
        assert isinstance(category_service.get_category(work.id).error, CategoryNotFoundError)

    def test_deleted_name_can_be_reused(self, category_service):
        work = category_service.create_category("Work").value
        category_service.delete_category(work.id)

        assert isinstance(category_service.create_category("work"), Ok)
