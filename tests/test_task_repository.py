import sqlite3

import pytest

from src.tasks.database import open_database, resolve_db_path
from src.tasks.models import Task, TaskDraft
from src.tasks.repository import TaskRepository


@pytest.fixture
def repo(tmp_path):
    conn = open_database(tmp_path / "tasks.db")
    repository = TaskRepository(conn)
    repository.initialize()
    yield repository
    conn.close()


def test_task_repository_crud_cycle(repo):
    created = repo.add_task(TaskDraft(name="Buy milk", description="", category="Errands"))
    assert created.id == 1
    assert created.category == "Errands"

    assert repo.get_all_tasks() == [Task(id=1, name="Buy milk", description="", category="Errands")]

    assert repo.update_task(Task(id=1, name="Buy oat milk", description="2 litres", category="Errands")) == 1
    assert repo.get_task(1).name == "Buy oat milk"

    assert repo.delete_task(1) == 1
    assert repo.get_all_tasks() == []


def test_initialize_is_idempotent(tmp_path):
    db_path = tmp_path / "tasks.db"
    conn = open_database(db_path)
    repo = TaskRepository(conn)
    repo.initialize()
    repo.add_task(TaskDraft(name="Keep me", category="Home"))
    repo.initialize()
    conn.close()

    conn = open_database(db_path)
    repo = TaskRepository(conn)
    repo.initialize()
    assert [task.name for task in repo.get_all_tasks()] == ["Keep me"]
    conn.close()


def test_update_never_changes_category(repo):
    task = repo.add_task(TaskDraft(name="Report", description="", category="Work"))

    repo.update_task(Task(id=task.id, name="X", description="Y", category="Z"))

    stored = repo.get_task(task.id)
    assert (stored.name, stored.description, stored.category) == ("X", "Y", "Work")


def test_get_tasks_by_category_is_exact(repo):
    repo.add_task(TaskDraft(name="a", category="Work"))
    repo.add_task(TaskDraft(name="b", category="work"))
    repo.add_task(TaskDraft(name="c", category="Work "))

    assert [task.name for task in repo.get_tasks_by_category("Work")] == ["a"]
    assert [task.name for task in repo.get_tasks_by_category("work")] == ["b"]


def test_delete_tasks_by_category_leaves_others(repo):
    repo.add_task(TaskDraft(name="a", category="Work"))
    repo.add_task(TaskDraft(name="b", category="Home"))
    repo.add_task(TaskDraft(name="c", category="Work"))

    assert repo.delete_tasks_by_category("Work") == 2
    assert [task.name for task in repo.get_all_tasks()] == ["b"]
    assert repo.delete_tasks_by_category("Work") == 0


def test_delete_missing_task_is_noop(repo):
    assert repo.delete_task(42) == 0


def test_update_missing_task_touches_nothing(repo):
    repo.add_task(TaskDraft(name="a", category="c"))

    assert repo.update_task(Task(id=42, name="x", description="", category="y")) == 0
    assert repo.get_task(42) is None
    assert [task.name for task in repo.get_all_tasks()] == ["a"]


def test_ids_are_not_reused(repo):
    first = repo.add_task(TaskDraft(name="a", category="c"))
    repo.delete_task(first.id)
    second = repo.add_task(TaskDraft(name="b", category="c"))
    assert second.id == first.id + 1


def test_missing_table_raises_sqlite_error(tmp_path):
    conn = open_database(tmp_path / "empty.db")
    repo = TaskRepository(conn)
    with pytest.raises(sqlite3.OperationalError):
        repo.get_all_tasks()
    conn.close()


def test_resolve_db_path_precedence(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKYMINDER_DB_PATH", str(tmp_path / "env.db"))
    assert resolve_db_path(tmp_path / "arg.db") == tmp_path / "arg.db"
    assert resolve_db_path() == tmp_path / "env.db"

    monkeypatch.delenv("TASKYMINDER_DB_PATH")
    assert resolve_db_path().name == "tasks.db"
    assert resolve_db_path().parent.name == "data"
