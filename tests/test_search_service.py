"""Tests for SearchService."""

from datetime import timedelta

import pytest

from taskman.domain.task import Priority, SortStrategy, Status, TaskFilter

from conftest import NOW


@pytest.fixture
def sample_tasks(task_service):
    """A small task list covering statuses, priorities and due dates."""
    milk = task_service.create_task(
        "Buy milk", "From the corner shop", Priority.LOW, "shopping", NOW + timedelta(hours=3)
    ).value
    report = task_service.create_task(
        "Quarterly report", "Numbers for Q1", Priority.HIGH, "work", NOW - timedelta(days=1)
    ).value
    gym = task_service.create_task("Gym", "", Priority.MEDIUM, None, NOW + timedelta(days=5)).value
    deploy = task_service.create_task("Deploy", "release MILKSHAKE app", Priority.CRITICAL, "work").value
    task_service.update_task_status(deploy.id, Status.IN_PROGRESS)
    return {"milk": milk, "report": report, "gym": gym, "deploy": deploy}


def titles(result):
    return [t.title for t in result.value]


class TestSearch:
    """Tests for keyword search and single-criterion filters."""

    def test_keyword_search(self, search_service, sample_tasks):
        assert titles(search_service.search_by_keyword("milk")) == ["Buy milk", "Deploy"]

    def test_keyword_without_match(self, search_service, sample_tasks):
        assert titles(search_service.search_by_keyword("holiday")) == []

    def test_filter_by_status(self, search_service, sample_tasks):
        assert titles(search_service.filter_by_status(Status.IN_PROGRESS)) == ["Deploy"]

    def test_filter_by_priority(self, search_service, sample_tasks):
        assert titles(search_service.filter_by_priority(Priority.HIGH)) == ["Quarterly report"]

    def test_filter_by_category(self, search_service, sample_tasks):
        assert titles(search_service.filter_by_category("work")) == ["Quarterly report", "Deploy"]


class TestDueQueries:
    """Tests for overdue, due-soon and date-range queries."""

    def test_overdue(self, search_service, sample_tasks):
        assert titles(search_service.get_overdue_tasks()) == ["Quarterly report"]

    def test_due_soon(self, search_service, sample_tasks):
        assert titles(search_service.get_tasks_due_soon()) == ["Buy milk"]

    def test_due_soon_moves_with_clock(self, search_service, sample_tasks, clock):
        clock.advance(days=4, hours=12)

        assert titles(search_service.get_tasks_due_soon()) == ["Gym"]
        assert titles(search_service.get_overdue_tasks()) == ["Buy milk", "Quarterly report"]

    def test_date_range_inclusive(self, search_service, sample_tasks):
        start = NOW + timedelta(hours=3)
        end = NOW + timedelta(days=5)

        assert titles(search_service.filter_by_date_range(start, end)) == ["Buy milk", "Gym"]


class TestFilterAndSort:
    """Tests for the combined filter and sorting."""

    def test_empty_filter_returns_all(self, search_service, sample_tasks):
        assert len(search_service.filter(TaskFilter()).value) == 4

    def test_combined_filter(self, search_service, sample_tasks):
        criteria = TaskFilter(category_id="work", overdue_only=True)
        assert titles(search_service.filter(criteria)) == ["Quarterly report"]

    def test_filter_with_keyword_and_priority(self, search_service, sample_tasks):
        criteria = TaskFilter(keyword="milk", priority=Priority.CRITICAL)
        assert titles(search_service.filter(criteria)) == ["Deploy"]

    def test_sort_by_due_date(self, search_service, sample_tasks):
        tasks = search_service.filter(TaskFilter()).value

        ordered = search_service.sort(tasks, SortStrategy.DUE_DATE_ASC)

        assert [t.title for t in ordered] == ["Quarterly report", "Buy milk", "Gym", "Deploy"]

    def test_sort_by_priority(self, search_service, sample_tasks):
        tasks = search_service.filter(TaskFilter()).value

        ordered = search_service.sort(tasks, SortStrategy.PRIORITY_DESC)

        assert [t.title for t in ordered] == ["Deploy", "Quarterly report", "Gym", "Buy milk"]
