# tests/test_http_app.py

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from todo_scheduler.connectors.http_app import create_app
from todo_scheduler.connectors.http_schemas import MAX_TASK_ID, parse_task_id
from todo_scheduler.core.errors import InvalidTaskId, StoreError
from todo_scheduler.core.state import AppState

from .fakes import FixedClock


def _create(client: TestClient, **fields) -> int:
    body = {"date": "", "title": "Task", "comment": "", "repeat": ""}
    body.update(fields)
    resp = client.post("/api/task", json=body)
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]


def test_create_and_get(client: TestClient) -> None:
    task_id = _create(client, date="20240701", title="Dentist", comment="10:00", repeat="y")
    assert isinstance(task_id, int)

    resp = client.get("/api/task", params={"id": task_id})
    assert resp.status_code == 200
    assert resp.json() == {
        "id": str(task_id),
        "date": "20240701",
        "title": "Dentist",
        "comment": "10:00",
        "repeat": "y",
    }


def test_create_normalizes_date(client: TestClient) -> None:
    # clock is fixed at 2024-06-10
    no_date = _create(client)
    past = _create(client, date="20240101")
    past_weekly = _create(client, date="20240101", repeat="w 3")

    assert client.get("/api/task", params={"id": no_date}).json()["date"] == "20240610"
    assert client.get("/api/task", params={"id": past}).json()["date"] == "20240610"
    assert client.get("/api/task", params={"id": past_weekly}).json()["date"] == "20240612"


def test_create_validation_errors(client: TestClient) -> None:
    resp = client.post("/api/task", json={"date": "20240701", "title": ""})
    assert resp.status_code == 400
    assert resp.json() == {"error": "no title"}

    resp = client.post("/api/task", json={"date": "01/07/2024", "title": "x"})
    assert resp.status_code == 400
    assert "error" in resp.json()

    resp = client.post("/api/task", json={"date": "20240101", "title": "x", "repeat": "d 401"})
    assert resp.status_code == 400
    assert "interval" in resp.json()["error"]

    resp = client.post("/api/task", json={"title": "x", "repeat": "m 32"})
    assert resp.status_code == 400
    assert "day" in resp.json()["error"]


def test_malformed_body(client: TestClient) -> None:
    resp = client.post("/api/task", content="{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("invalid request")


def test_get_bad_or_unknown_id(client: TestClient) -> None:
    assert client.get("/api/task").status_code == 400
    resp = client.get("/api/task", params={"id": "abc"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid id"}
    resp = client.get("/api/task", params={"id": 999})
    assert resp.status_code == 404
    assert resp.json() == {"error": "task not found"}


@pytest.mark.parametrize("raw", ["²", "٣", "99999999999999999999999", "9223372036854775808", "-1", "0"])
def test_out_of_range_or_non_ascii_id_is_400(client: TestClient, raw: str) -> None:
    for resp in (
        client.get("/api/task", params={"id": raw}),
        client.delete("/api/task", params={"id": raw}),
        client.post("/api/task/done", params={"id": raw}),
        client.put("/api/task", json={"id": raw, "date": "20240701", "title": "x"}),
    ):
        assert resp.status_code == 400
        assert resp.json() == {"error": "invalid id"}


def test_parse_task_id_bounds() -> None:
    assert parse_task_id(MAX_TASK_ID) == MAX_TASK_ID
    assert parse_task_id(f" {MAX_TASK_ID} ") == MAX_TASK_ID
    for raw in (MAX_TASK_ID + 1, 10**25, True, None, ""):
        with pytest.raises(InvalidTaskId):
            parse_task_id(raw)


def test_edit(client: TestClient) -> None:
    task_id = _create(client, date="20240701", title="Old")

    resp = client.put(
        "/api/task",
        json={"id": task_id, "date": "20240501", "title": "New", "comment": "c", "repeat": "d 2"},
    )
    assert resp.status_code == 200
    assert resp.json()["date"] == "20240612"
    assert resp.json()["id"] == str(task_id)

    got = client.get("/api/task", params={"id": str(task_id)}).json()
    assert got == {"id": str(task_id), "date": "20240612", "title": "New", "comment": "c", "repeat": "d 2"}


def test_edit_errors(client: TestClient) -> None:
    task_id = _create(client, date="20240701")

    resp = client.put("/api/task", json={"id": "999", "date": "20240701", "title": "x"})
    assert resp.status_code == 404

    resp = client.put("/api/task", json={"date": "20240701", "title": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid id"}

    resp = client.put("/api/task", json={"id": str(task_id), "date": "20240701", "title": ""})
    assert resp.status_code == 400
    assert client.get("/api/task", params={"id": task_id}).json()["title"] == "Task"


def test_delete(client: TestClient) -> None:
    task_id = _create(client, date="20240701")

    resp = client.delete("/api/task", params={"id": task_id})
    assert resp.status_code == 200
    assert resp.json() == {}
    assert client.get("/api/task", params={"id": task_id}).status_code == 404
    assert client.delete("/api/task", params={"id": task_id}).status_code == 404


def test_done_one_off_and_recurring(client: TestClient) -> None:
    one_off = _create(client, date="20240701")
    recurring = _create(client, date="20240610", repeat="d 3")

    resp = client.post("/api/task/done", params={"id": one_off})
    assert resp.status_code == 200
    assert resp.json() == {}
    assert client.get("/api/task", params={"id": one_off}).status_code == 404

    resp = client.post("/api/task/done", params={"id": recurring})
    assert resp.status_code == 200
    assert client.get("/api/task", params={"id": recurring}).json()["date"] == "20240613"

    assert client.post("/api/task/done", params={"id": 12345}).status_code == 404


def test_list_tasks(client: TestClient, state: AppState) -> None:
    for i in range(12):
        _create(client, date=f"202407{i + 10:02d}", title=f"t{i}")
    _create(client, date="20240615", title="first")

    resp = client.get("/api/tasks")
    assert resp.status_code == 200
    tasks = resp.json()["tasks"]
    assert len(tasks) == state.settings.tasks_limit
    assert tasks[0]["title"] == "first"
    assert [t["date"] for t in tasks] == sorted(t["date"] for t in tasks)


def test_list_tasks_empty(client: TestClient) -> None:
    assert client.get("/api/tasks").json() == {"tasks": []}


def test_nextdate(client: TestClient) -> None:
    resp = client.get("/api/nextdate", params={"now": "20240110", "date": "20240101", "repeat": "d 7"})
    assert resp.status_code == 200
    assert resp.text == "20240115"

    # without "now" the injected clock (2024-06-10, Monday) is used
    resp = client.get("/api/nextdate", params={"date": "20240101", "repeat": "w 1,3,5"})
    assert resp.text == "20240612"


def test_nextdate_errors(client: TestClient) -> None:
    resp = client.get("/api/nextdate", params={"now": "20240110", "date": "20240101", "repeat": "k 1"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "unsupported repeat format"

    resp = client.get("/api/nextdate", params={"now": "bad", "date": "20240101", "repeat": "y"})
    assert resp.status_code == 400

    resp = client.get("/api/nextdate", params={"date": "20240101", "repeat": ""})
    assert resp.status_code == 400

    resp = client.get("/api/nextdate", params={"date": "2024", "repeat": "y"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid start date"


def test_store_failure_is_500(client: TestClient, state: AppState, monkeypatch) -> None:
    def boom(task_id: int):
        raise StoreError("get_task failed: disk I/O error")

    monkeypatch.setattr(state.task_store, "get_task", boom)

    resp = client.get("/api/task", params={"id": 1})
    assert resp.status_code == 500
    assert resp.json() == {"error": "get_task failed: disk I/O error"}


def test_clock_is_read_per_request(client: TestClient, clock: FixedClock) -> None:
    clock.today = date(2024, 12, 31)
    task_id = _create(client, date="20240101")
    assert client.get("/api/task", params={"id": task_id}).json()["date"] == "20241231"


def test_static_files_served(state: AppState) -> None:
    web_dir = state.settings.web_dir
    web_dir.mkdir(parents=True)
    (web_dir / "index.html").write_text("<h1>tasks</h1>", "utf-8")

    with TestClient(create_app(state)) as c:
        resp = c.get("/")
        assert resp.status_code == 200
        assert "<h1>tasks</h1>" in resp.text
        # API routes still win over the static mount
        assert c.get("/api/tasks").status_code == 200
