import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app
from src.server.dependencies import close_task_store


@pytest.fixture
def client(tmp_path, monkeypatch):
    db_path = tmp_path / "api_tasks.db"
    monkeypatch.setenv("TASKYMINDER_DB_PATH", str(db_path))
    close_task_store()
    with TestClient(create_app()) as test_client:
        yield test_client
    close_task_store()


def create(client, name, category, description=""):
    resp = client.post(
        "/api/tasks",
        json={"name": name, "description": description, "category": category},
    )
    assert resp.status_code == 200
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_task_api_crud_flow(client):
    resp = client.get("/api/tasks")
    assert resp.status_code == 200
    assert resp.json() == []

    task = create(client, "Buy milk", "Errands")
    assert task == {"id": 1, "name": "Buy milk", "description": "", "category": "Errands"}

    resp = client.put(
        f"/api/tasks/{task['id']}",
        json={"name": "Buy oat milk", "description": "2 litres", "category": "Groceries"},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "id": 1,
        "name": "Buy oat milk",
        "description": "2 litres",
        "category": "Errands",
    }

    resp = client.get(f"/api/tasks/{task['id']}")
    assert resp.status_code == 200
    assert resp.json()["category"] == "Errands"

    resp = client.delete(f"/api/tasks/{task['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}

    resp = client.get("/api/tasks")
    assert resp.json() == []


def test_blank_fields_are_rejected(client):
    resp = client.post("/api/tasks", json={"name": "", "category": "X"})
    assert resp.status_code == 422

    resp = client.post("/api/tasks", json={"name": "Task", "category": "  "})
    assert resp.status_code == 422

    assert client.get("/api/tasks").json() == []

    task = create(client, "Task", "X")
    resp = client.put(f"/api/tasks/{task['id']}", json={"name": " "})
    assert resp.status_code == 422


def test_missing_task_returns_404(client):
    assert client.get("/api/tasks/99").status_code == 404
    assert client.put("/api/tasks/99", json={"name": "x"}).status_code == 404
    assert client.delete("/api/tasks/99").status_code == 404


def test_categories_follow_tasks(client):
    first = create(client, "Buy milk", "Errands")
    second = create(client, "Pay rent", "Errands")
    create(client, "Write report", "Work")

    assert client.get("/api/categories").json() == {"categories": ["Errands", "Work"]}

    resp = client.get("/api/categories/Errands/tasks")
    assert [task["name"] for task in resp.json()] == ["Buy milk", "Pay rent"]
    assert client.get("/api/tasks", params={"category": "errands"}).json() == []

    client.delete(f"/api/tasks/{first['id']}")
    assert client.get("/api/categories").json()["categories"] == ["Errands", "Work"]
    client.delete(f"/api/tasks/{second['id']}")
    assert client.get("/api/categories").json()["categories"] == ["Work"]


def test_delete_category(client):
    create(client, "a", "Work")
    create(client, "b", "Home")
    create(client, "c", "Work")

    resp = client.delete("/api/categories/Work")
    assert resp.status_code == 200
    assert resp.json() == {"category": "Work", "deleted": 2}
    assert [task["name"] for task in client.get("/api/tasks").json()] == ["b"]

    resp = client.delete("/api/categories/Work")
    assert resp.json() == {"category": "Work", "deleted": 0}
