#app/api/task.py
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.schemas.task import (
    TaskUpdate, TaskRead, TaskWithSubtasks, TaskWithProject,
    AssignmentCreate, AssignmentRead,
)
from app.schemas.comment import CommentCreate, CommentRead
from app.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate, TimeEntryRead
from app.schemas.custom_field import CustomFieldValueSet, CustomFieldValueRead
from app.schemas.response import SimpleMessage
from app.crud import task as crud_task
from app.crud import comment as crud_comment
from app.crud import time_entry as crud_time
from app.crud import custom_field as crud_fields
from app.core.permissions import AccessLevel, require_task_access
from app.core.settings import settings
from app.core.exceptions import (
    ValidationError,
    TaskValidationError,
    TimeEntryValidationError,
    CustomFieldValidationError,
    DuplicateAssignment,
)
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as UserModel

logger = logging.getLogger("Taskboard.TasksAPI")

router = APIRouter(prefix="/tasks", tags=["Tasks"])

# --- Дашборд ---

@router.get("/recent", response_model=List[TaskWithProject])
def recent_tasks(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Последние изменённые задачи пользователя (создал или назначен).
    """
    return crud_task.get_recent_tasks(db, current_user.id, limit=settings.RECENT_TASKS_LIMIT)

@router.get("/calendar", response_model=List[TaskWithProject])
def calendar_tasks(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1970, le=9999),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Задачи со сроком с начала прошлого до конца следующего месяца.
    Без параметров — относительно текущего месяца.
    """
    now = datetime.now(timezone.utc)
    if month is None or year is None:
        month, year = now.month, now.year
    return crud_task.get_calendar_tasks(db, current_user.id, month, year)

# --- Задача ---

@router.get("/{task_id}", response_model=TaskWithSubtasks)
def get_one_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Получить задачу по ID.
    """
    return require_task_access(db, current_user, task_id, AccessLevel.READ)

@router.patch("/{task_id}", response_model=TaskRead)
def patch_task(
    task_id: int,
    data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Частичное обновление задачи, включая статус и набор исполнителей.
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    try:
        return crud_task.update_task(db, task, data.model_dump(exclude_unset=True), actor_id=current_user.id)
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{task_id}", response_model=SimpleMessage)
def remove_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Удалить задачу (автор, владелец проекта или OWNER/ADMIN).
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.ADMIN)
    crud_task.delete_task(db, task)
    return SimpleMessage(message="Task deleted successfully")

# --- Исполнители ---

@router.get("/{task_id}/assign", response_model=List[AssignmentRead])
def list_assignments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    return crud_task.get_assignments(db, task_id)

@router.post("/{task_id}/assign", response_model=AssignmentRead, status_code=status.HTTP_201_CREATED)
def assign_to_task(
    task_id: int,
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Назначить пользователя на задачу. Уже назначен — 409.
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    try:
        return crud_task.assign_user(db, task, data.user_id, actor_id=current_user.id)
    except DuplicateAssignment as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.delete("/{task_id}/assign", response_model=SimpleMessage)
def unassign_from_task(
    task_id: int,
    user_id: int = Query(..., description="ID снимаемого исполнителя"),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    crud_task.unassign_user(db, task, user_id)
    return SimpleMessage(message="User unassigned from task successfully")

# --- Кастомные поля ---

@router.get("/{task_id}/custom-fields/{field_id}", response_model=CustomFieldValueRead)
def get_custom_field_value(
    task_id: int,
    field_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    task = require_task_access(db, current_user, task_id, AccessLevel.READ)
    return crud_fields.get_value(db, task, field_id)

@router.put("/{task_id}/custom-fields/{field_id}", response_model=CustomFieldValueRead)
def set_custom_field_value(
    task_id: int,
    field_id: int,
    data: CustomFieldValueSet,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Установить значение поля (создаёт или обновляет).
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    try:
        return crud_fields.set_value(db, task, field_id, data.value)
    except CustomFieldValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{task_id}/custom-fields/{field_id}", response_model=SimpleMessage)
def delete_custom_field_value(
    task_id: int,
    field_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    task = require_task_access(db, current_user, task_id, AccessLevel.ADMIN)
    crud_fields.delete_value(db, task, field_id)
    return SimpleMessage(message="Custom field value deleted successfully")

# --- Учёт времени ---

@router.get("/{task_id}/time-entries", response_model=List[TimeEntryRead])
def list_time_entries(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    return crud_time.get_time_entries(db, task_id)

@router.post("/{task_id}/time-entries", response_model=TimeEntryRead, status_code=status.HTTP_201_CREATED)
def create_task_time_entry(
    task_id: int,
    data: TimeEntryCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Запустить таймер или записать интервал. Второй открытый таймер — 400.
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    try:
        return crud_time.create_time_entry(db, task, current_user.id, data.model_dump())
    except TimeEntryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{task_id}/time-entries/{entry_id}", response_model=TimeEntryRead)
def get_task_time_entry(
    task_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    return crud_time.get_time_entry(db, task_id, entry_id)

@router.patch("/{task_id}/time-entries/{entry_id}", response_model=TimeEntryRead)
def patch_task_time_entry(
    task_id: int,
    entry_id: int,
    data: TimeEntryUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Изменить свою запись времени (длительность пересчитывается).
    """
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    entry = crud_time.get_own_time_entry(db, task_id, entry_id, current_user.id)
    try:
        return crud_time.update_time_entry(db, entry, data.model_dump(exclude_unset=True))
    except TimeEntryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{task_id}/time-entries/{entry_id}", response_model=SimpleMessage)
def delete_task_time_entry(
    task_id: int,
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    entry = crud_time.get_own_time_entry(db, task_id, entry_id, current_user.id)
    crud_time.delete_time_entry(db, entry)
    return SimpleMessage(message="Time entry deleted successfully")

# --- Комментарии ---

@router.get("/{task_id}/comments", response_model=List[CommentRead])
def list_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_task_access(db, current_user, task_id, AccessLevel.READ)
    return crud_comment.get_comments(db, task_id)

@router.post("/{task_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(
    task_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Добавить комментарий; упомянутые и наблюдатели задачи получают уведомления.
    """
    task = require_task_access(db, current_user, task_id, AccessLevel.WRITE)
    try:
        return crud_comment.create_comment(db, task, current_user.id, data.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
