#app/crud/notification.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.notification import Notification
from app.core.exceptions import NotificationNotFound

logger = logging.getLogger("Taskboard.Notifications")

def add_notification(
    db: Session,
    recipient_id: int,
    type: str,
    content: str,
    related_item_id: Optional[int] = None,
    related_item_type: Optional[str] = None,
) -> Notification:
    """
    Добавляет уведомление в текущую транзакцию (без commit).
    Коммитит вызывающий код вместе с основным изменением.
    """
    notification = Notification(
        recipient_id=recipient_id,
        type=type,
        content=content,
        related_item_id=related_item_id,
        related_item_type=related_item_type,
    )
    db.add(notification)
    return notification

def get_notifications(db: Session, user_id: int, unread_only: bool = False, limit: int = 50) -> List[Notification]:
    query = db.query(Notification).filter(Notification.recipient_id == user_id)
    if unread_only:
        query = query.filter(Notification.read == False)
    return query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(limit).all()

def mark_read(db: Session, user_id: int, notification_id: int) -> Notification:
    """
    Отметить уведомление прочитанным. Чужие уведомления неотличимы от отсутствующих.
    """
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.recipient_id == user_id)
        .first()
    )
    if not notification:
        raise NotificationNotFound()
    notification.read = True
    db.commit()
    return notification

def mark_all_read(db: Session, user_id: int) -> int:
    updated = (
        db.query(Notification)
        .filter(Notification.recipient_id == user_id, Notification.read == False)
        .update({Notification.read: True})
    )
    db.commit()
    logger.info(f"Marked {updated} notifications as read for user {user_id}")
    return updated
