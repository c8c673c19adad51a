import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session

from app.core.time_tracking import compute_duration, as_utc
from app.crud.task import create_task
from app.crud.time_entry import (
    create_time_entry,
    update_time_entry,
    get_own_time_entry,
    delete_time_entry,
    get_time_entries,
)
from app.models.time_entry import TimeEntry
from app.core.exceptions import ActiveTimeEntryExists, TimeEntryValidationError, TimeEntryNotFound

START = datetime(2025, 3, 10, 9, 0, 0, tzinfo=timezone.utc)

@pytest.fixture
def task(db: Session, project, test_user):
    return create_task(db, project, {"title": "Tracked"}, actor_id=test_user.id)

def test_compute_duration_floors_seconds():
    assert compute_duration(START, START + timedelta(seconds=90, milliseconds=999)) == 90
    assert compute_duration(START, START) == 0
    assert compute_duration(START, None) is None
    assert compute_duration(None, START) is None

def test_compute_duration_treats_naive_as_utc():
    naive_end = (START + timedelta(hours=1)).replace(tzinfo=None)
    assert compute_duration(START, naive_end) == 3600
    assert as_utc(naive_end).tzinfo == timezone.utc

def test_create_closed_entry_has_duration(db: Session, task, test_user):
    entry = create_time_entry(db, task, test_user.id, {"start_time": START, "end_time": START + timedelta(minutes=25)})
    assert entry.duration == 1500
    assert entry.user_id == test_user.id

def test_open_entry_has_no_duration(db: Session, task, test_user):
    entry = create_time_entry(db, task, test_user.id, {"start_time": START})
    assert entry.end_time is None
    assert entry.duration is None

def test_second_open_entry_is_rejected(db: Session, task, test_user):
    create_time_entry(db, task, test_user.id, {"start_time": START})
    with pytest.raises(ActiveTimeEntryExists):
        create_time_entry(db, task, test_user.id, {"start_time": START + timedelta(minutes=5)})
    assert db.query(TimeEntry).filter(TimeEntry.user_id == test_user.id).count() == 1

def test_closed_entries_do_not_conflict_with_open_one(db: Session, task, test_user, other_user):
    create_time_entry(db, task, test_user.id, {"start_time": START})
    create_time_entry(db, task, test_user.id, {"start_time": START, "end_time": START + timedelta(minutes=1)})
    # у другого пользователя свой открытый таймер
    create_time_entry(db, task, other_user.id, {"start_time": START})
    assert len(get_time_entries(db, task.id)) == 3

def test_end_before_start_is_rejected(db: Session, task, test_user):
    with pytest.raises(TimeEntryValidationError):
        create_time_entry(db, task, test_user.id, {"start_time": START, "end_time": START - timedelta(seconds=1)})

def test_stopping_timer_recomputes_duration(db: Session, task, test_user):
    entry = create_time_entry(db, task, test_user.id, {"start_time": START})
    update_time_entry(db, entry, {"end_time": START + timedelta(hours=2)})
    assert entry.duration == 7200

    # после остановки можно запустить новый таймер
    create_time_entry(db, task, test_user.id, {"start_time": START + timedelta(hours=3)})

def test_update_start_uses_existing_end(db: Session, task, test_user):
    entry = create_time_entry(db, task, test_user.id, {"start_time": START, "end_time": START + timedelta(hours=1)})
    update_time_entry(db, entry, {"start_time": START + timedelta(minutes=30)})
    assert entry.duration == 1800
    with pytest.raises(TimeEntryValidationError):
        update_time_entry(db, entry, {"start_time": START + timedelta(hours=2)})

def test_only_owner_can_modify_entry(db: Session, task, test_user, other_user):
    entry = create_time_entry(db, task, test_user.id, {"start_time": START})
    with pytest.raises(TimeEntryNotFound):
        get_own_time_entry(db, task.id, entry.id, other_user.id)
    own = get_own_time_entry(db, task.id, entry.id, test_user.id)
    delete_time_entry(db, own)
    assert get_time_entries(db, task.id) == []
