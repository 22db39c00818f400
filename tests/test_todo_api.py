import pytest
from fastapi.testclient import TestClient

from src.server.app import create_app
from src.server.dependencies import (
    PROJECT_ROOT,
    close_todo_repository,
    get_todo_repository,
    resolve_project_path,
)


def create_test_client(tmp_path, monkeypatch) -> TestClient:
    db_path = tmp_path / "api_todos.db"
    monkeypatch.setenv("TODO_APP_DB_PATH", str(db_path))
    close_todo_repository()
    app = create_app()
    return TestClient(app)


@pytest.fixture
def client(tmp_path, monkeypatch):
    yield create_test_client(tmp_path, monkeypatch)
    close_todo_repository()


TODOS = [
    {
        "id": 1,
        "todo": "Learn HTML",
        "priority": "HIGH",
        "status": "TO DO",
        "category": "LEARNING",
        "dueDate": "2021-04-04",
    },
    {
        "id": 2,
        "todo": "Buy a Car",
        "priority": "MEDIUM",
        "status": "IN PROGRESS",
        "category": "HOME",
        "dueDate": "2021-09-22",
    },
    {
        "id": 3,
        "todo": "Clean the garden",
        "priority": "LOW",
        "status": "DONE",
        "category": "HOME",
        "dueDate": "2021-4-4",
    },
]


def seed(client: TestClient) -> None:
    for todo in TODOS:
        resp = client.post("/todos", json=todo)
        assert resp.status_code == 200
        assert resp.text == "Todo Successfully Added"


def test_todo_api_crud_flow(client):
    resp = client.get("/todos")
    assert resp.status_code == 200
    assert resp.json() == []

    payload = {
        "id": 7,
        "todo": "Prepare slides",
        "priority": "MEDIUM",
        "status": "TO DO",
        "category": "WORK",
        "dueDate": "2021-2-9",
    }
    resp = client.post("/todos", json=payload)
    assert resp.status_code == 200
    assert resp.text == "Todo Successfully Added"

    resp = client.get("/todos/7")
    assert resp.status_code == 200
    assert resp.json() == {**payload, "dueDate": "2021-02-09"}

    resp = client.put("/todos/7", json={"status": "DONE"})
    assert resp.status_code == 200
    assert resp.text == "Status Updated"
    assert client.get("/todos/7").json()["status"] == "DONE"

    resp = client.delete("/todos/7")
    assert resp.status_code == 200
    assert resp.text == "Todo Deleted"

    resp = client.get("/todos")
    assert resp.json() == []


def test_list_filters(client):
    seed(client)

    resp = client.get("/todos", params={"status": "TO DO"})
    assert [todo["id"] for todo in resp.json()] == [1]

    resp = client.get("/todos", params={"priority": "HIGH", "status": "IN PROGRESS"})
    assert resp.json() == []

    resp = client.get("/todos", params={"search_q": "Buy"})
    assert [todo["id"] for todo in resp.json()] == [2]

    resp = client.get("/todos", params={"category": "HOME", "priority": ""})
    assert [todo["id"] for todo in resp.json()] == [2, 3]


@pytest.mark.parametrize(
    "params, message",
    [
        ({"priority": "URGENT"}, "Invalid Todo Priority"),
        ({"priority": "high"}, "Invalid Todo Priority"),
        ({"status": "PENDING"}, "Invalid Todo Status"),
        ({"category": "GARDEN"}, "Invalid Todo Category"),
        ({"priority": "BAD", "status": "BAD"}, "Invalid Todo Priority"),
    ],
)
def test_list_rejects_invalid_filters(client, params, message):
    resp = client.get("/todos", params=params)
    assert resp.status_code == 400
    assert resp.text == message


def test_get_missing_todo_returns_empty_object(client):
    resp = client.get("/todos/404")
    assert resp.status_code == 200
    assert resp.json() == {}


def test_agenda(client):
    seed(client)

    resp = client.get("/agenda", params={"date": "2021-04-04"})
    assert resp.status_code == 200
    todos = resp.json()
    assert [todo["id"] for todo in todos] == [1, 3]
    assert all(todo["dueDate"] == "2021-04-04" for todo in todos)

    resp = client.get("/agenda", params={"date": "2021-9-22"})
    assert [todo["id"] for todo in resp.json()] == [2]

    resp = client.get("/agenda", params={"date": "2000-01-01"})
    assert resp.json() == []


@pytest.mark.parametrize("params", [{"date": "not-a-date"}, {"date": "2021-13-01"}, {}])
def test_agenda_rejects_invalid_date(client, params):
    resp = client.get("/agenda", params=params)
    assert resp.status_code == 400
    assert resp.text == "Invalid Due Date"


@pytest.mark.parametrize(
    "override, message",
    [
        ({"priority": "TOP"}, "Invalid Todo Priority"),
        ({"status": "WAITING"}, "Invalid Todo Status"),
        ({"category": "SPORTS"}, "Invalid Todo Category"),
        ({"dueDate": "2021-02-30"}, "Invalid Due Date"),
    ],
)
def test_create_rejects_invalid_fields(client, override, message):
    payload = {**TODOS[0], **override}
    resp = client.post("/todos", json=payload)
    assert resp.status_code == 400
    assert resp.text == message
    assert client.get("/todos/1").json() == {}


@pytest.mark.parametrize(
    "body, message",
    [
        ({"todo": "Learn CSS"}, "Todo Updated"),
        ({"priority": "LOW"}, "Priority Updated"),
        ({"status": "DONE"}, "Status Updated"),
        ({"category": "WORK"}, "Category Updated"),
        ({"dueDate": "2021-1-12"}, "Due Date Updated"),
        ({"status": "DONE", "category": "WORK"}, "Category Updated"),
    ],
)
def test_update_reports_last_field(client, body, message):
    seed(client)
    resp = client.put("/todos/1", json=body)
    assert resp.status_code == 200
    assert resp.text == message


def test_update_normalizes_due_date(client):
    seed(client)
    client.put("/todos/1", json={"dueDate": "2021-1-12"})
    assert client.get("/todos/1").json()["dueDate"] == "2021-01-12"


def test_update_rejects_invalid_fields(client):
    seed(client)
    resp = client.put("/todos/1", json={"status": "DONE", "category": "NOPE"})
    assert resp.status_code == 400
    assert resp.text == "Invalid Todo Category"
    assert client.get("/todos/1").json()["status"] == "TO DO"


def test_update_without_fields(client):
    seed(client)
    resp = client.put("/todos/1", json={})
    assert resp.status_code == 400
    assert resp.text == "No Fields To Update"


def test_delete_is_idempotent(client):
    seed(client)
    for _ in range(2):
        resp = client.delete("/todos/2")
        assert resp.status_code == 200
        assert resp.text == "Todo Deleted"

    resp = client.delete("/todos/999")
    assert resp.status_code == 200
    assert resp.text == "Todo Deleted"
    assert [todo["id"] for todo in client.get("/todos").json()] == [1, 3]


def test_duplicate_id_is_a_server_error(client):
    seed(client)
    resp = client.post("/todos", json=TODOS[0])
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Failed to create todo"}


def test_list_includes_rows_with_missing_fields(client):
    payload = {
        "id": 9,
        "todo": "No priority",
        "status": "TO DO",
        "category": "HOME",
        "dueDate": "2021-01-01",
    }
    assert client.post("/todos", json=payload).text == "Todo Successfully Added"
    client.post("/todos", json={"id": 10})

    resp = client.get("/todos")
    assert resp.status_code == 200
    assert [todo["id"] for todo in resp.json()] == [9, 10]

    resp = client.get("/todos", params={"status": "TO DO"})
    assert [todo["id"] for todo in resp.json()] == [9]


def test_startup_opens_shared_repository(tmp_path, monkeypatch):
    monkeypatch.setenv("TODO_APP_DB_PATH", str(tmp_path / "startup.db"))
    close_todo_repository()

    with TestClient(create_app()) as client:
        assert get_todo_repository.cache_info().currsize == 1
        assert get_todo_repository().db_path == tmp_path / "startup.db"
        assert (tmp_path / "startup.db").exists()
        assert client.get("/todos").json() == []

    assert get_todo_repository.cache_info().currsize == 0


def test_relative_paths_resolve_at_project_root(tmp_path):
    assert resolve_project_path("logs/todo_app.log") == PROJECT_ROOT / "logs" / "todo_app.log"
    assert resolve_project_path(tmp_path / "x.db") == tmp_path / "x.db"
