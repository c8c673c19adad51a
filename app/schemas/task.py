#app/schemas/task.py
from pydantic import BaseModel, Field, ConfigDict, constr
from typing import Optional, List
from app.schemas.types import UtcDatetime

from app.models.task import TaskStatus, TaskPriority
from app.schemas.user import UserShort

class TaskBase(BaseModel):
    """
    TaskBase — базовая схема задачи (используется для create/read).
    """
    title: constr(min_length=1, max_length=255) = Field(..., examples=["Implement login page"], description="Название задачи")
    description: Optional[str] = Field(None, examples=["Detailed description"], description="Описание задачи")
    status: TaskStatus = Field(TaskStatus.TODO, description="Статус задачи: TODO, IN_PROGRESS, REVIEW, DONE")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Приоритет: LOW, MEDIUM, HIGH, URGENT")
    due_date: Optional[UtcDatetime] = Field(None, examples=["2024-12-31T12:00:00Z"], description="Срок")
    section_id: Optional[int] = Field(None, description="ID секции (по умолчанию первая секция проекта)")
    parent_task_id: Optional[int] = Field(None, description="ID родительской задачи (если есть)")

class TaskCreate(TaskBase):
    """
    TaskCreate — создание новой задачи в проекте.
    """
    assigned_user_ids: List[int] = Field(default_factory=list, description="Исполнители")

class TaskUpdate(BaseModel):
    """
    TaskUpdate — обновление задачи (все поля опциональны).
    assigned_user_ids, если передан, полностью заменяет набор исполнителей.
    """
    title: Optional[constr(min_length=1, max_length=255)] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[UtcDatetime] = None
    section_id: Optional[int] = None
    order: Optional[int] = None
    assigned_user_ids: Optional[List[int]] = None

class TaskShort(BaseModel):
    """
    TaskShort — короткая схема задачи для списков/выборок.
    """
    id: int
    title: str
    project_id: int
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[UtcDatetime] = None
    completed_at: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True)

class ProjectRef(BaseModel):
    id: int
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)

class TaskRead(TaskBase):
    """
    TaskRead — полная схема задачи для ответа (response).
    """
    id: int
    project_id: int
    creator_id: int
    order: int
    completed_at: Optional[UtcDatetime] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    creator: UserShort
    assigned_users: List[UserShort] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class TaskWithSubtasks(TaskRead):
    subtasks: List[TaskRead] = Field(default_factory=list)

class TaskWithProject(TaskRead):
    project: ProjectRef

class AssignmentCreate(BaseModel):
    user_id: int = Field(..., description="ID назначаемого пользователя")

class AssignmentRead(BaseModel):
    id: int
    task_id: int
    user_id: int
    assigned_at: UtcDatetime
    user: UserShort

    model_config = ConfigDict(from_attributes=True)
