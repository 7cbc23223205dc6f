"""Shared test fixtures for the taskman test suite."""

from datetime import UTC, datetime, timedelta

import pytest

from taskman.application import CategoryService, SearchService, TaskService
from taskman.infrastructure.storage import JsonCategoryRepository, JsonTaskRepository

# Fixed instant used as "now" across tests
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def clock():
    """A FakeClock starting at NOW."""
    return FakeClock()


@pytest.fixture
def task_repository(tmp_path):
    """Task repository backed by a temporary tasks.json."""
    return JsonTaskRepository(tmp_path / "tasks.json")


@pytest.fixture
def category_repository(tmp_path):
    """Category repository without the default categories."""
    return JsonCategoryRepository(tmp_path / "categories.json", seed_defaults=False)


# ============================================================================
# Services
# ============================================================================


@pytest.fixture
def task_service(task_repository, clock):
    return TaskService(task_repository, clock=clock)


@pytest.fixture
def category_service(category_repository):
    return CategoryService(category_repository)


@pytest.fixture
def search_service(task_repository, clock):
    return SearchService(task_repository, clock=clock)


# ============================================================================
# CLI
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Data directory for CLI runs, with HOME isolated from the real one."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("TASKMAN_DATA_DIR", raising=False)
    return tmp_path / "data"
