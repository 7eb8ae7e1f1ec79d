import pytest

from apps.habits.store import new_habits_store
from apps.tasks.store import new_tasks_store


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "db" / "arqui.db")


@pytest.fixture
def habits_store(db_path):
    store = new_habits_store(db_path)
    yield store
    store.close()


@pytest.fixture
def tasks_store(db_path):
    store = new_tasks_store(db_path)
    yield store
    store.close()
