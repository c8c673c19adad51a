import pytest
from sqlalchemy.orm import Session

from app.crud.notification import add_notification, get_notifications, mark_read, mark_all_read
from app.core.exceptions import NotificationNotFound

def _notify(db: Session, user, content: str):
    notification = add_notification(db, recipient_id=user.id, type="TASK_ASSIGNED", content=content)
    db.commit()
    return notification

def test_notifications_are_listed_newest_first(db: Session, test_user, other_user):
    _notify(db, test_user, "first")
    _notify(db, test_user, "second")
    _notify(db, other_user, "foreign")

    contents = [n.content for n in get_notifications(db, test_user.id)]
    assert contents == ["second", "first"]

def test_mark_read_only_for_recipient(db: Session, test_user, other_user):
    notification = _notify(db, test_user, "hello")

    with pytest.raises(NotificationNotFound):
        mark_read(db, other_user.id, notification.id)

    assert mark_read(db, test_user.id, notification.id).read is True
    assert get_notifications(db, test_user.id, unread_only=True) == []

def test_mark_all_read(db: Session, test_user, other_user):
    _notify(db, test_user, "one")
    _notify(db, test_user, "two")
    foreign = _notify(db, other_user, "three")

    assert mark_all_read(db, test_user.id) == 2
    db.expire_all()
    assert all(n.read for n in get_notifications(db, test_user.id))
    assert get_notifications(db, other_user.id, unread_only=True)[0].id == foreign.id
