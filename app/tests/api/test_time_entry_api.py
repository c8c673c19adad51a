from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.crud.task import create_task
from app.models.time_entry import TimeEntry

START = "2025-03-10T09:00:00Z"

def _entries_url(task) -> str:
    return f"/tasks/{task.id}/time-entries"

def test_manual_entry_duration(client: TestClient, db: Session, project, test_user, normal_user_token_headers):
    task = create_task(db, project, {"title": "Billable"}, actor_id=test_user.id)
    response = client.post(
        _entries_url(task),
        json={"start_time": START, "end_time": "2025-03-10T10:30:15Z", "description": "Call"},
        headers=normal_user_token_headers,
    )
    assert response.status_code == 201
    assert response.json()["duration"] == 5415

def test_end_before_start_rejected(client: TestClient, db: Session, project, test_user, normal_user_token_headers):
    task = create_task(db, project, {"title": "Billable"}, actor_id=test_user.id)
    response = client.post(
        _entries_url(task),
        json={"start_time": START, "end_time": "2025-03-10T08:00:00Z"},
        headers=normal_user_token_headers,
    )
    assert response.status_code == 400

def test_second_open_timer_rejected(client: TestClient, db: Session, project, test_user, normal_user_token_headers):
    first = create_task(db, project, {"title": "One"}, actor_id=test_user.id)
    second = create_task(db, project, {"title": "Two"}, actor_id=test_user.id)

    response = client.post(_entries_url(first), json={"start_time": START}, headers=normal_user_token_headers)
    assert response.status_code == 201
    assert response.json()["end_time"] is None
    assert response.json()["duration"] is None

    response = client.post(_entries_url(second), json={"start_time": START}, headers=normal_user_token_headers)
    assert response.status_code == 400
    assert response.json() == {
        "error": "You already have an active time entry. Please stop it before starting a new one."
    }
    assert db.query(TimeEntry).count() == 1

def test_stop_timer(client: TestClient, db: Session, project, test_user, normal_user_token_headers):
    task = create_task(db, project, {"title": "Timer"}, actor_id=test_user.id)
    entry = client.post(_entries_url(task), json={"start_time": START}, headers=normal_user_token_headers).json()

    response = client.patch(
        f"{_entries_url(task)}/{entry['id']}",
        json={"end_time": "2025-03-10T09:01:00Z"},
        headers=normal_user_token_headers,
    )
    assert response.status_code == 200
    assert response.json()["duration"] == 60

    response = client.post(_entries_url(task), json={"start_time": START}, headers=normal_user_token_headers)
    assert response.status_code == 201

def test_only_author_edits_entry(
    client: TestClient, db: Session, project, test_user, other_user, add_project_member,
    normal_user_token_headers, other_user_token_headers,
):
    add_project_member(project, other_user)
    task = create_task(db, project, {"title": "Shared"}, actor_id=test_user.id)
    entry = client.post(
        _entries_url(task),
        json={"start_time": START, "end_time": "2025-03-10T09:30:00Z"},
        headers=normal_user_token_headers,
    ).json()

    response = client.get(_entries_url(task), headers=other_user_token_headers)
    assert [e["id"] for e in response.json()] == [entry["id"]]

    url = f"{_entries_url(task)}/{entry['id']}"
    assert client.patch(url, json={"description": "mine"}, headers=other_user_token_headers).status_code == 404
    assert client.delete(url, headers=other_user_token_headers).status_code == 404

    assert client.delete(url, headers=normal_user_token_headers).status_code == 200
    assert client.get(url, headers=normal_user_token_headers).status_code == 404
