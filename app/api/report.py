#app/api/report.py
import logging
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.schemas.report import (
    ProjectReport, TaskStatsReport, UserPerformance, WorkloadReport, TeamMember,
)
from app.crud import report as crud_report
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as UserModel

logger = logging.getLogger("Taskboard.ReportsAPI")

router = APIRouter(prefix="/reports", tags=["Reports"])
team_router = APIRouter(tags=["Team"])

@router.get("/projects", response_model=List[ProjectReport])
def projects_report(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Сводка по каждому доступному проекту.
    """
    return crud_report.project_reports(db, current_user.id)

@router.get("/tasks", response_model=TaskStatsReport)
def tasks_report(
    time_range: str = Query("week", pattern="^(week|month|quarter)$"),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Распределение задач по статусам/приоритетам и динамика по дням.
    """
    return crud_report.task_stats(db, current_user.id, time_range=time_range)

@router.get("/users", response_model=List[UserPerformance])
def users_report(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    return crud_report.user_reports(db, current_user.id)

@team_router.get("/workload", response_model=WorkloadReport)
def workload(
    week: Optional[date] = Query(None, description="Любая дата внутри нужной недели (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Нагрузка участников на неделю (понедельник-воскресенье).
    """
    return crud_report.workload(db, current_user.id, week=week)

@team_router.get("/team", response_model=List[TeamMember])
def team(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Участники доступных проектов с их проектами и счётчиками задач.
    """
    return crud_report.team(db, current_user.id)
