#app/crud/task.py
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func, or_, select
from app.models.task import Task, TaskAssignment, TaskStatus
from app.models.project import Project, Section
from app.models.user import User
from app.models.notification import NotificationType
from app.crud.notification import add_notification
from app.crud.project import get_visible_project_ids
from app.core.task_state import apply_status, diff_assignments
from app.core.time_tracking import as_utc
from app.core.exceptions import (
    TaskValidationError,
    UserNotFound,
    DuplicateAssignment,
    AssignmentNotFound,
)
import logging
from typing import List, Optional, Iterable

logger = logging.getLogger("Taskboard.Tasks")

def _status_value(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)

def _check_users_exist(db: Session, user_ids: Iterable[int]) -> List[int]:
    ids = list(dict.fromkeys(user_ids))
    if not ids:
        return ids
    found = {row[0] for row in db.query(User.id).filter(User.id.in_(ids)).all()}
    missing = [i for i in ids if i not in found]
    if missing:
        raise TaskValidationError(f"Unknown user ids: {missing}")
    return ids

def _check_section(db: Session, project_id: int, section_id: Optional[int]) -> None:
    if section_id is None:
        return
    section = db.query(Section).filter(Section.id == section_id, Section.project_id == project_id).first()
    if not section:
        raise TaskValidationError(f"Section {section_id} does not belong to project {project_id}.")

def _notify_assigned(db: Session, task: Task, user_ids: Iterable[int], actor_id: int) -> None:
    for user_id in user_ids:
        if user_id == actor_id:
            continue
        add_notification(
            db,
            recipient_id=user_id,
            type=NotificationType.TASK_ASSIGNED.value,
            content=f'You were assigned to "{task.title}"',
            related_item_id=task.id,
            related_item_type="task",
        )

def _next_order(db: Session, project_id: int, section_id: Optional[int]) -> int:
    max_order = (
        db.query(func.max(Task.order))
        .filter(Task.project_id == project_id, Task.section_id == section_id, Task.parent_task_id.is_(None))
        .scalar()
    )
    return 0 if max_order is None else max_order + 1

def create_task(db: Session, project: Project, data: dict, actor_id: int) -> Task:
    """
    Создать новую задачу в проекте.
    Секция по умолчанию — первая секция проекта, порядок — в конец секции.
    Исполнители получают TASK_ASSIGNED (кроме самого автора).
    """
    title = (data.get("title") or "").strip()
    if not title:
        raise TaskValidationError("Title is required.")

    section_id = data.get("section_id")
    _check_section(db, project.id, section_id)
    if section_id is None:
        first_section = (
            db.query(Section).filter(Section.project_id == project.id).order_by(Section.order).first()
        )
        section_id = first_section.id if first_section else None

    parent_task_id = data.get("parent_task_id")
    if parent_task_id is not None:
        parent = db.query(Task).filter(Task.id == parent_task_id, Task.project_id == project.id).first()
        if not parent:
            raise TaskValidationError(f"Parent task {parent_task_id} not found in this project.")

    assigned_ids = _check_users_exist(db, data.get("assigned_user_ids") or [])

    task = Task(
        project_id=project.id,
        section_id=section_id,
        parent_task_id=parent_task_id,
        creator_id=actor_id,
        title=title,
        description=data.get("description"),
        priority=_status_value(data.get("priority")) or "MEDIUM",
        due_date=as_utc(data.get("due_date")),
        order=_next_order(db, project.id, section_id),
    )
    task.status = TaskStatus.TODO.value
    apply_status(task, _status_value(data.get("status")))
    task.assignments = [TaskAssignment(user_id=user_id) for user_id in assigned_ids]
    db.add(task)
    try:
        db.flush()
        _notify_assigned(db, task, assigned_ids, actor_id)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Failed to create task: {e}")
        raise TaskValidationError("Database error while creating task.")
    logger.info(f"Created task {task.id} in project {project.id}")
    return task

def get_project_tasks(db: Session, project_id: int) -> List[Task]:
    """
    Задачи верхнего уровня проекта (сабтаски доступны через task.subtasks).
    """
    return (
        db.query(Task)
        .filter(Task.project_id == project_id, Task.parent_task_id.is_(None))
        .order_by(Task.order, Task.created_at)
        .all()
    )

def update_task(db: Session, task: Task, data: dict, actor_id: int) -> Task:
    """
    Частичное обновление задачи.

    - статус DONE из любого другого ставит completed_at, любой не-DONE статус его снимает;
    - assigned_user_ids (если передан) заменяет набор исполнителей целиком,
      новые исполнители получают TASK_ASSIGNED;
    - при завершении задачи автор (если это не он сам) получает TASK_COMPLETED.

    Всё применяется одной транзакцией: при ошибке откатывается целиком.
    """
    try:
        if "title" in data:
            title = (data["title"] or "").strip()
            if not title:
                raise TaskValidationError("Title cannot be empty.")
            task.title = title
        if "description" in data:
            task.description = data["description"]
        if data.get("priority") is not None:
            task.priority = _status_value(data["priority"])
        if "due_date" in data:
            task.due_date = as_utc(data["due_date"])
        if "section_id" in data:
            _check_section(db, task.project_id, data["section_id"])
            task.section_id = data["section_id"]
        if data.get("order") is not None:
            task.order = data["order"]

        completed_now = apply_status(task, _status_value(data.get("status")))

        if data.get("assigned_user_ids") is not None:
            desired = _check_users_exist(db, data["assigned_user_ids"])
            current = [a.user_id for a in task.assignments]
            to_add, to_remove = diff_assignments(current, desired)
            for assignment in list(task.assignments):
                if assignment.user_id in to_remove:
                    task.assignments.remove(assignment)
            for user_id in desired:
                if user_id in to_add:
                    task.assignments.append(TaskAssignment(user_id=user_id))
            _notify_assigned(db, task, [u for u in desired if u in to_add], actor_id)

        if completed_now and task.creator_id != actor_id:
            add_notification(
                db,
                recipient_id=task.creator_id,
                type=NotificationType.TASK_COMPLETED.value,
                content=f'Task "{task.title}" has been completed',
                related_item_id=task.id,
                related_item_type="task",
            )
        db.commit()
    except TaskValidationError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Failed to update task {task.id}: {e}")
        raise TaskValidationError("Database error while updating task.")
    logger.info(f"Updated task {task.id}")
    return task

def delete_task(db: Session, task: Task) -> None:
    """
    Удалить задачу; у сабтасков ссылка на родителя обнуляется.
    """
    task_id = task.id
    db.delete(task)
    db.commit()
    logger.info(f"Deleted task {task_id}")

# ==== Исполнители ====

def get_assignments(db: Session, task_id: int) -> List[TaskAssignment]:
    return (
        db.query(TaskAssignment)
        .filter(TaskAssignment.task_id == task_id)
        .order_by(TaskAssignment.assigned_at)
        .all()
    )

def assign_user(db: Session, task: Task, user_id: int, actor_id: int) -> TaskAssignment:
    """
    Назначить пользователя на задачу. Повторное назначение — DuplicateAssignment (409).
    """
    if not db.query(User).filter(User.id == user_id).first():
        raise UserNotFound()
    existing = (
        db.query(TaskAssignment)
        .filter(TaskAssignment.task_id == task.id, TaskAssignment.user_id == user_id)
        .first()
    )
    if existing:
        raise DuplicateAssignment()

    assignment = TaskAssignment(user_id=user_id)
    task.assignments.append(assignment)
    try:
        db.flush()
        _notify_assigned(db, task, [user_id], actor_id)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateAssignment()
    logger.info(f"Assigned user {user_id} to task {task.id}")
    return assignment

def unassign_user(db: Session, task: Task, user_id: int) -> None:
    assignment = (
        db.query(TaskAssignment)
        .filter(TaskAssignment.task_id == task.id, TaskAssignment.user_id == user_id)
        .first()
    )
    if not assignment:
        raise AssignmentNotFound()
    task.assignments.remove(assignment)
    db.commit()
    logger.info(f"Unassigned user {user_id} from task {task.id}")

# ==== Выборки для дашборда ====

def _assigned_task_ids(user_id: int):
    return select(TaskAssignment.task_id).where(TaskAssignment.user_id == user_id)

def get_recent_tasks(db: Session, user_id: int, limit: int = 5) -> List[Task]:
    """
    Последние изменённые задачи, которые пользователь создал или на которые назначен.
    """
    return (
        db.query(Task)
        .filter(or_(Task.creator_id == user_id, Task.id.in_(_assigned_task_ids(user_id))))
        .order_by(Task.updated_at.desc(), Task.id.desc())
        .limit(limit)
        .all()
    )

def _add_months(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1

def calendar_range(month: int, year: int):
    """
    Границы календаря: с начала предыдущего месяца до конца следующего.
    Возвращает полуинтервал [start, end).
    """
    start_year, start_month = _add_months(year, month, -1)
    end_year, end_month = _add_months(year, month, 2)
    start = datetime(start_year, start_month, 1, tzinfo=timezone.utc)
    end = datetime(end_year, end_month, 1, tzinfo=timezone.utc)
    return start, end

def get_calendar_tasks(db: Session, user_id: int, month: int, year: int) -> List[Task]:
    """
    Задачи со сроком в окне календаря: свои, назначенные или из доступных проектов.
    """
    start, end = calendar_range(month, year)
    project_ids = get_visible_project_ids(db, user_id)
    return (
        db.query(Task)
        .filter(Task.due_date.isnot(None), Task.due_date >= start, Task.due_date < end)
        .filter(or_(
            Task.creator_id == user_id,
            Task.id.in_(_assigned_task_ids(user_id)),
            Task.project_id.in_(project_ids),
        ))
        .order_by(Task.due_date)
        .all()
    )
