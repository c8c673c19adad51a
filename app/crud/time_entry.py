#app/crud/time_entry.py
import logging
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.time_entry import TimeEntry
from app.models.task import Task
from app.core.time_tracking import as_utc, compute_duration
from app.core.exceptions import (
    ActiveTimeEntryExists,
    TimeEntryNotFound,
    TimeEntryValidationError,
)

logger = logging.getLogger("Taskboard.TimeEntries")

def _check_interval(start, end) -> None:
    if start is not None and end is not None and as_utc(end) < as_utc(start):
        raise TimeEntryValidationError("End time cannot be before start time.")

def get_time_entries(db: Session, task_id: int) -> List[TimeEntry]:
    return (
        db.query(TimeEntry)
        .filter(TimeEntry.task_id == task_id)
        .order_by(TimeEntry.start_time.desc())
        .all()
    )

def get_time_entry(db: Session, task_id: int, entry_id: int) -> TimeEntry:
    entry = db.query(TimeEntry).filter(TimeEntry.id == entry_id, TimeEntry.task_id == task_id).first()
    if not entry:
        raise TimeEntryNotFound()
    return entry

def get_own_time_entry(db: Session, task_id: int, entry_id: int, user_id: int) -> TimeEntry:
    """
    Изменять и удалять запись может только её владелец; для остальных её «нет».
    """
    entry = get_time_entry(db, task_id, entry_id)
    if entry.user_id != user_id:
        raise TimeEntryNotFound()
    return entry

def create_time_entry(db: Session, task: Task, user_id: int, data: dict) -> TimeEntry:
    """
    Создать запись времени. Без end_time это запущенный таймер; второй открытый
    таймер у пользователя отсекает частичный уникальный индекс.
    """
    start = as_utc(data.get("start_time"))
    end = as_utc(data.get("end_time"))
    if start is None:
        raise TimeEntryValidationError("Start time is required.")
    _check_interval(start, end)

    entry = TimeEntry(
        task_id=task.id,
        user_id=user_id,
        description=data.get("description"),
        start_time=start,
        end_time=end,
        duration=compute_duration(start, end),
    )
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"User {user_id} already has an active time entry")
        raise ActiveTimeEntryExists()
    logger.info(f"Created time entry {entry.id} for task {task.id} by user {user_id}")
    return entry

def update_time_entry(db: Session, entry: TimeEntry, data: dict) -> TimeEntry:
    """
    Обновить запись; длительность пересчитывается из новых или сохранённых границ.
    """
    start = as_utc(data.get("start_time") or entry.start_time)
    end = as_utc(data.get("end_time") or entry.end_time)
    _check_interval(start, end)

    if "description" in data:
        entry.description = data["description"]
    entry.start_time = start
    entry.end_time = end
    entry.duration = compute_duration(start, end)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ActiveTimeEntryExists()
    logger.info(f"Updated time entry {entry.id}")
    return entry

def delete_time_entry(db: Session, entry: TimeEntry) -> None:
    entry_id = entry.id
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted time entry {entry_id}")
