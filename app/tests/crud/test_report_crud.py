import pytest
from datetime import date, datetime, timedelta, timezone
from sqlalchemy.orm import Session

from app.crud.task import create_task, update_task
from app.crud.report import (
    completion_rate,
    project_reports,
    task_stats,
    stats_range,
    user_reports,
    workload,
    week_bounds,
    team,
)

NOW = datetime.now(timezone.utc)

def test_completion_rate_rounds_half_up():
    assert completion_rate(0, 0) == 0
    assert completion_rate(1, 3) == 33
    assert completion_rate(2, 3) == 67
    assert completion_rate(1, 8) == 13
    assert completion_rate(4, 4) == 100

def test_stats_range():
    wednesday = date(2025, 3, 12)
    assert stats_range("week", wednesday) == (date(2025, 3, 10), date(2025, 3, 16))
    assert stats_range("month", wednesday) == (wednesday - timedelta(days=30), wednesday)
    assert stats_range("quarter", wednesday) == (wednesday - timedelta(days=90), wednesday)
    assert week_bounds(date(2025, 3, 16)) == (date(2025, 3, 10), date(2025, 3, 16))

def test_project_report_counts(db: Session, project, test_user):
    create_task(db, project, {"title": "Done", "status": "DONE"}, actor_id=test_user.id)
    create_task(db, project, {"title": "Overdue", "due_date": NOW - timedelta(days=1)}, actor_id=test_user.id)
    create_task(db, project, {"title": "Soon", "due_date": NOW + timedelta(days=2)}, actor_id=test_user.id)
    create_task(db, project, {"title": "Later", "due_date": NOW + timedelta(days=30)}, actor_id=test_user.id)
    db.expire_all()

    [report] = project_reports(db, test_user.id)
    assert report["total_tasks"] == 4
    assert report["completed_tasks"] == 1
    assert report["overdue_tasks"] == 1
    assert report["upcoming_tasks"] == 1
    assert report["completion_rate"] == 25

def test_task_stats_distribution(db: Session, project, test_user):
    create_task(db, project, {"title": "A", "priority": "HIGH"}, actor_id=test_user.id)
    task = create_task(db, project, {"title": "B", "priority": "LOW"}, actor_id=test_user.id)
    update_task(db, task, {"status": "DONE"}, actor_id=test_user.id)

    stats = task_stats(db, test_user.id, time_range="week")
    assert stats["total_tasks"] == 2
    assert stats["by_status"] == {"TODO": 1, "IN_PROGRESS": 0, "REVIEW": 0, "DONE": 1}
    assert stats["by_priority"]["HIGH"] == 1
    assert stats["by_priority"]["LOW"] == 1
    assert len(stats["daily"]) == 7
    today = [d for d in stats["daily"] if d["date"] == NOW.date()]
    assert today and today[0]["created"] == 2 and today[0]["completed"] == 1

def test_user_reports_use_assignments(db: Session, project, test_user, other_user, add_project_member):
    add_project_member(project, other_user)
    create_task(db, project, {"title": "Urgent", "priority": "URGENT", "assigned_user_ids": [other_user.id]}, actor_id=test_user.id)
    create_task(db, project, {"title": "Done", "status": "DONE", "assigned_user_ids": [other_user.id]}, actor_id=test_user.id)

    reports = {r["user"].id: r for r in user_reports(db, test_user.id)}
    assert set(reports) == {test_user.id, other_user.id}
    assert reports[other_user.id]["total_tasks"] == 2
    assert reports[other_user.id]["completed_tasks"] == 1
    assert reports[other_user.id]["high_priority_tasks"] == 1
    assert reports[other_user.id]["completion_rate"] == 50
    assert reports[test_user.id]["total_tasks"] == 0

def test_workload_week_tasks(db: Session, project, test_user):
    week_start, _ = week_bounds(NOW.date())
    in_week = datetime.combine(week_start, datetime.min.time(), tzinfo=timezone.utc) + timedelta(hours=12)
    create_task(db, project, {"title": "This week", "due_date": in_week, "assigned_user_ids": [test_user.id]}, actor_id=test_user.id)
    create_task(db, project, {"title": "Next month", "due_date": in_week + timedelta(days=35), "assigned_user_ids": [test_user.id]}, actor_id=test_user.id)

    result = workload(db, test_user.id, week=NOW.date())
    assert result["week_start"] == week_start
    [entry] = result["members"]
    assert entry["user"].id == test_user.id
    assert [t.title for t in entry["tasks"]] == ["This week"]
    assert entry["total_tasks"] == 2

def test_workload_includes_user_without_projects(db: Session, other_user):
    result = workload(db, other_user.id)
    assert [m["user"].id for m in result["members"]] == [other_user.id]

def test_team_lists_projects_with_roles(db: Session, project, public_project, test_user, other_user, add_project_member):
    add_project_member(project, other_user, "ADMIN")
    members = {m["user"].id: m for m in team(db, other_user.id)}
    assert set(members) == {test_user.id, other_user.id}
    assert {p["id"]: p["role"] for p in members[other_user.id]["projects"]} == {project.id: "ADMIN"}
    assert {p["role"] for p in members[test_user.id]["projects"]} == {"OWNER"}
