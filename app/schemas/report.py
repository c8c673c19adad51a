#app/schemas/report.py
from pydantic import BaseModel, Field
from typing import Dict, List
from datetime import date

from app.schemas.user import UserShort
from app.schemas.task import TaskShort

class ProjectReport(BaseModel):
    """
    ProjectReport — сводка по проекту: всего, выполнено, просрочено, скоро срок.
    """
    id: int
    name: str
    color: str
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    upcoming_tasks: int
    completion_rate: int = Field(..., description="Процент выполненных задач (0-100)")

class DailyTaskCount(BaseModel):
    date: date
    created: int
    completed: int

class TaskStatsReport(BaseModel):
    """
    TaskStatsReport — распределение задач по статусам/приоритетам и динамика по дням.
    """
    time_range: str
    total_tasks: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    daily: List[DailyTaskCount]

class UserPerformance(BaseModel):
    user: UserShort
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    high_priority_tasks: int
    completion_rate: int

class WorkloadEntry(BaseModel):
    """
    WorkloadEntry — нагрузка участника на выбранную неделю.
    """
    user: UserShort
    tasks: List[TaskShort]
    total_tasks: int
    completed_tasks: int
    overdue_tasks: int
    upcoming_tasks: int

class WorkloadReport(BaseModel):
    week_start: date
    week_end: date
    members: List[WorkloadEntry]

class TeamProjectRef(BaseModel):
    id: int
    name: str
    color: str
    role: str

class TeamMember(BaseModel):
    user: UserShort
    assigned_tasks: int
    completed_tasks: int
    projects: List[TeamProjectRef]
