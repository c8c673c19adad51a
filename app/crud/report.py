#app/crud/report.py
"""
Отчёты по доступным пользователю проектам: сводки, статистика задач,
показатели участников, нагрузка на неделю и состав команды.

Доступные проекты — свои, с участием и публичные. Задачи участника
считаются по назначениям (TaskAssignment).
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional
from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from app.models.project import Project, ProjectMember
from app.models.task import Task, TaskAssignment, TaskStatus, TaskPriority
from app.models.user import User
from app.crud.project import get_visible_project_ids
from app.core.time_tracking import as_utc

logger = logging.getLogger("Taskboard.Reports")

UPCOMING_DAYS = 7
HIGH_PRIORITIES = {TaskPriority.HIGH.value, TaskPriority.URGENT.value}

def completion_rate(completed: int, total: int) -> int:
    """Процент выполненных, округление половины вверх."""
    if total <= 0:
        return 0
    return int(completed * 100 / total + 0.5)

def _is_done(task: Task) -> bool:
    return task.status == TaskStatus.DONE.value

def _is_overdue(task: Task, now: datetime) -> bool:
    return not _is_done(task) and task.due_date is not None and as_utc(task.due_date) < now

def _is_upcoming(task: Task, now: datetime) -> bool:
    if _is_done(task) or task.due_date is None:
        return False
    due = as_utc(task.due_date)
    return now < due < now + timedelta(days=UPCOMING_DAYS)

def project_reports(db: Session, user_id: int, now: Optional[datetime] = None) -> List[dict]:
    now = now or datetime.now(timezone.utc)
    project_ids = get_visible_project_ids(db, user_id)
    if not project_ids:
        return []
    projects = db.query(Project).filter(Project.id.in_(project_ids)).order_by(Project.name).all()
    reports = []
    for project in projects:
        tasks = project.tasks
        completed = sum(1 for t in tasks if _is_done(t))
        reports.append({
            "id": project.id,
            "name": project.name,
            "color": project.color,
            "total_tasks": len(tasks),
            "completed_tasks": completed,
            "overdue_tasks": sum(1 for t in tasks if _is_overdue(t, now)),
            "upcoming_tasks": sum(1 for t in tasks if _is_upcoming(t, now)),
            "completion_rate": completion_rate(completed, len(tasks)),
        })
    return reports

def stats_range(time_range: str, today: date):
    """
    week — текущая неделя с понедельника; month — последние 30 дней; иначе — 90 дней.
    """
    if time_range == "week":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if time_range == "month":
        return today - timedelta(days=30), today
    return today - timedelta(days=90), today

def task_stats(db: Session, user_id: int, time_range: str = "week", today: Optional[date] = None) -> dict:
    today = today or datetime.now(timezone.utc).date()
    project_ids = get_visible_project_ids(db, user_id)
    tasks = db.query(Task).filter(Task.project_id.in_(project_ids)).all() if project_ids else []

    by_status: Dict[str, int] = {s.value: 0 for s in TaskStatus}
    by_priority: Dict[str, int] = {p.value: 0 for p in TaskPriority}
    created_per_day: Dict[date, int] = {}
    completed_per_day: Dict[date, int] = {}
    for task in tasks:
        if task.status in by_status:
            by_status[task.status] += 1
        if task.priority in by_priority:
            by_priority[task.priority] += 1
        created_day = as_utc(task.created_at).date()
        created_per_day[created_day] = created_per_day.get(created_day, 0) + 1
        if task.completed_at is not None:
            completed_day = as_utc(task.completed_at).date()
            completed_per_day[completed_day] = completed_per_day.get(completed_day, 0) + 1

    start, end = stats_range(time_range, today)
    daily = []
    day = start
    while day <= end:
        daily.append({
            "date": day,
            "created": created_per_day.get(day, 0),
            "completed": completed_per_day.get(day, 0),
        })
        day += timedelta(days=1)

    return {
        "time_range": time_range,
        "total_tasks": len(tasks),
        "by_status": by_status,
        "by_priority": by_priority,
        "daily": daily,
    }

def team_users(db: Session, project_ids: List[int]) -> List[User]:
    """
    Владельцы и участники заданных проектов (без повторов).
    """
    if not project_ids:
        return []
    owner_ids = select(Project.owner_id).where(Project.id.in_(project_ids))
    member_ids = select(ProjectMember.user_id).where(ProjectMember.project_id.in_(project_ids))
    return (
        db.query(User)
        .filter(or_(User.id.in_(owner_ids), User.id.in_(member_ids)))
        .order_by(User.username)
        .all()
    )

def assigned_tasks(db: Session, user_id: int, project_ids: List[int]) -> List[Task]:
    if not project_ids:
        return []
    return (
        db.query(Task)
        .join(TaskAssignment, TaskAssignment.task_id == Task.id)
        .filter(TaskAssignment.user_id == user_id, Task.project_id.in_(project_ids))
        .order_by(Task.due_date, Task.id)
        .all()
    )

def user_reports(db: Session, user_id: int, now: Optional[datetime] = None) -> List[dict]:
    now = now or datetime.now(timezone.utc)
    project_ids = get_visible_project_ids(db, user_id)
    reports = []
    for user in team_users(db, project_ids):
        tasks = assigned_tasks(db, user.id, project_ids)
        completed = sum(1 for t in tasks if _is_done(t))
        reports.append({
            "user": user,
            "total_tasks": len(tasks),
            "completed_tasks": completed,
            "overdue_tasks": sum(1 for t in tasks if _is_overdue(t, now)),
            "high_priority_tasks": sum(1 for t in tasks if t.priority in HIGH_PRIORITIES),
            "completion_rate": completion_rate(completed, len(tasks)),
        })
    return reports

def week_bounds(day: date):
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)

def workload(db: Session, user_id: int, week: Optional[date] = None, now: Optional[datetime] = None) -> dict:
    """
    Нагрузка на неделю: текущий пользователь плюс команда доступных проектов.
    В tasks попадают задачи со сроком внутри недели, счётчики — по всем назначенным.
    """
    now = now or datetime.now(timezone.utc)
    week_start, week_end = week_bounds(week or now.date())
    project_ids = get_visible_project_ids(db, user_id)

    users = team_users(db, project_ids)
    if not any(u.id == user_id for u in users):
        users.insert(0, db.query(User).filter(User.id == user_id).first())

    members = []
    for user in users:
        tasks = assigned_tasks(db, user.id, project_ids)
        week_tasks = [
            t for t in tasks
            if t.due_date is not None and week_start <= as_utc(t.due_date).date() <= week_end
        ]
        members.append({
            "user": user,
            "tasks": week_tasks,
            "total_tasks": len(tasks),
            "completed_tasks": sum(1 for t in tasks if _is_done(t)),
            "overdue_tasks": sum(1 for t in tasks if _is_overdue(t, now)),
            "upcoming_tasks": sum(1 for t in tasks if _is_upcoming(t, now)),
        })
    return {"week_start": week_start, "week_end": week_end, "members": members}

def team(db: Session, user_id: int) -> List[dict]:
    """
    Участники доступных проектов: их проекты (с ролью) и счётчики назначенных задач.
    """
    project_ids = get_visible_project_ids(db, user_id)
    projects = db.query(Project).filter(Project.id.in_(project_ids)).order_by(Project.name).all() if project_ids else []
    memberships = (
        db.query(ProjectMember).filter(ProjectMember.project_id.in_(project_ids)).all() if project_ids else []
    )

    result = []
    for user in team_users(db, project_ids):
        roles = {p.id: "OWNER" for p in projects if p.owner_id == user.id}
        for m in memberships:
            if m.user_id == user.id and m.project_id not in roles:
                roles[m.project_id] = m.role
        tasks = assigned_tasks(db, user.id, project_ids)
        result.append({
            "user": user,
            "assigned_tasks": len(tasks),
            "completed_tasks": sum(1 for t in tasks if _is_done(t)),
            "projects": [
                {"id": p.id, "name": p.name, "color": p.color, "role": roles[p.id]}
                for p in projects if p.id in roles
            ],
        })
    return result
