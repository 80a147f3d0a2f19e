# tests/test_api.py

from __future__ import annotations

import json

import pytest

from taskmaster.tasks.task_models import Task


@pytest.fixture()
def payload() -> dict:
    return {"title": "Integration Test Task", "description": "Test Description", "completed": False}


def _send_json(client, method: str, url: str, body: dict):
    # json.dumps escapes non-ASCII, so lone surrogates reach the server intact.
    return client.request(
        method,
        url,
        content=json.dumps(body).encode("ascii"),
        headers={"Content-Type": "application/json"},
    )


def test_create_task_success(client, task_store, payload) -> None:
    r = client.post("/api/tasks", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["id"] is not None
    assert body["title"] == payload["title"]
    assert body["description"] == payload["description"]
    assert body["completed"] is False
    assert body["createdAt"] is not None
    assert body["updatedAt"] is not None

    tasks = task_store.find_all()
    assert len(tasks) == 1
    assert tasks[0].title == payload["title"]


def test_create_task_defaults(client) -> None:
    r = client.post("/api/tasks", json={"title": "bare"})

    assert r.status_code == 200
    assert r.json()["description"] is None
    assert r.json()["completed"] is False


@pytest.mark.parametrize("title", ["", "   "])
def test_create_task_with_blank_title_is_bad_request(client, task_store, payload, title) -> None:
    payload["title"] = title
    r = client.post("/api/tasks", json=payload)

    assert r.status_code == 400
    assert r.json()["title"] == "title must not be blank"
    assert task_store.count_tasks() == 0


def test_create_task_without_title_is_bad_request(client, task_store) -> None:
    r = client.post("/api/tasks", json={"description": "no title"})

    assert r.status_code == 400
    assert r.json()["title"]
    assert task_store.count_tasks() == 0


def test_create_task_with_malformed_json_is_bad_request(client) -> None:
    r = client.post(
        "/api/tasks",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert "body" in r.json()


def test_get_all_tasks(client, task_store) -> None:
    saved = task_store.save(Task(title="Integration Test Task", description="Test Description"))

    r = client.get("/api/tasks")

    assert r.status_code == 200
    body = r.json()
    assert len(body) == 1
    assert body[0]["id"] == saved.id
    assert body[0]["title"] == saved.title
    assert body[0]["description"] == saved.description


def test_get_task_by_id(client, task_store) -> None:
    saved = task_store.save(Task(title="Integration Test Task", description="Test Description"))

    r = client.get(f"/api/tasks/{saved.id}")

    assert r.status_code == 200
    assert r.json()["id"] == saved.id
    assert r.json()["title"] == saved.title


def test_get_task_by_id_not_found(client) -> None:
    r = client.get("/api/tasks/999")

    assert r.status_code == 404
    assert "not found" in r.json()["error"]


def test_get_task_with_non_numeric_id_is_bad_request(client) -> None:
    r = client.get("/api/tasks/abc")

    assert r.status_code == 400
    assert "task_id" in r.json()


def test_update_task_success(client, task_store, payload) -> None:
    saved = task_store.save(Task(title=payload["title"], description=payload["description"]))

    r = client.put(
        f"/api/tasks/{saved.id}",
        json={
            "id": 12345,
            "title": "Updated Title",
            "description": "Updated Description",
            "completed": True,
        },
    )

    assert r.status_code == 200
    body = r.json()
    assert body["id"] == saved.id
    assert body["title"] == "Updated Title"
    assert body["description"] == "Updated Description"
    assert body["completed"] is True

    stored = task_store.find_by_id(saved.id)
    assert stored.title == "Updated Title"
    assert stored.description == "Updated Description"
    assert stored.completed is True
    assert stored.created_at == saved.created_at


def test_update_task_not_found(client, payload) -> None:
    r = client.put("/api/tasks/999", json=payload)

    assert r.status_code == 404
    assert "not found" in r.json()["error"]


def test_update_task_with_blank_title_keeps_record(client, task_store) -> None:
    saved = task_store.save(Task(title="keep me"))

    r = client.put(f"/api/tasks/{saved.id}", json={"title": ""})

    assert r.status_code == 400
    assert task_store.find_by_id(saved.id).title == "keep me"


def test_delete_task_success(client, task_store) -> None:
    saved = task_store.save(Task(title="doomed"))

    r = client.delete(f"/api/tasks/{saved.id}")

    assert r.status_code == 204
    assert r.content == b""
    assert not task_store.exists_by_id(saved.id)


def test_delete_task_not_found(client) -> None:
    r = client.delete("/api/tasks/999")

    assert r.status_code == 404
    assert "not found" in r.json()["error"]


def test_end_to_end_task_flow(client, payload) -> None:
    # 1. create
    r = client.post("/api/tasks", json=payload)
    assert r.status_code == 200
    created = r.json()
    task_id = created["id"]

    # 2. read
    r = client.get(f"/api/tasks/{task_id}")
    assert r.status_code == 200
    assert r.json()["title"] == payload["title"]

    # 3. update
    r = client.put(f"/api/tasks/{task_id}", json={"title": "Updated in Flow", "completed": True})
    assert r.status_code == 200
    assert r.json()["title"] == "Updated in Flow"
    assert r.json()["completed"] is True
    assert r.json()["description"] is None
    assert r.json()["createdAt"] == created["createdAt"]

    # 4. list
    r = client.get("/api/tasks")
    assert r.status_code == 200
    assert r.json()[0]["id"] == task_id
    assert r.json()[0]["title"] == "Updated in Flow"

    # 5. delete
    assert client.delete(f"/api/tasks/{task_id}").status_code == 204

    # 6. gone
    assert client.get(f"/api/tasks/{task_id}").status_code == 404


@pytest.mark.parametrize("method", ["get", "delete"])
def test_out_of_range_id_is_bad_request(client, method) -> None:
    r = getattr(client, method)("/api/tasks/99999999999999999999")

    assert r.status_code == 400
    assert "task_id" in r.json()


def test_update_with_out_of_range_id_is_bad_request(client, payload) -> None:
    r = client.put(f"/api/tasks/{2**63}", json=payload)

    assert r.status_code == 400
    assert "task_id" in r.json()


def test_largest_sqlite_id_is_plain_not_found(client) -> None:
    r = client.get(f"/api/tasks/{2**63 - 1}")

    assert r.status_code == 404
    assert "not found" in r.json()["error"]


@pytest.mark.parametrize("field", ["title", "description"])
def test_create_task_with_lone_surrogate_is_bad_request(client, task_store, field) -> None:
    body = {"title": "fine", "description": "fine"}
    body[field] = "bad \ud800 text"

    r = _send_json(client, "POST", "/api/tasks", body)

    assert r.status_code == 400
    assert r.json()[field] == "must be valid UTF-8 text"
    assert task_store.count_tasks() == 0


def test_update_task_with_lone_surrogate_keeps_record(client, task_store) -> None:
    saved = task_store.save(Task(title="keep me"))

    r = _send_json(client, "PUT", f"/api/tasks/{saved.id}", {"title": "\ud800"})

    assert r.status_code == 400
    assert "title" in r.json()
    assert task_store.find_by_id(saved.id).title == "keep me"


def test_non_ascii_text_round_trips(client) -> None:
    r = client.post("/api/tasks", json={"title": "Купить молоко ☕", "description": "日本語"})

    assert r.status_code == 200
    fetched = client.get(f"/api/tasks/{r.json()['id']}").json()
    assert fetched["title"] == "Купить молоко ☕"
    assert fetched["description"] == "日本語"
