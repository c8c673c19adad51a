#app/api/notification.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from app.schemas.notification import NotificationRead
from app.schemas.response import SimpleMessage
from app.crud import notification as crud_notification
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as UserModel

router = APIRouter(prefix="/notifications", tags=["Notifications"])

@router.get("/", response_model=List[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Уведомления текущего пользователя, новые сверху.
    """
    return crud_notification.get_notifications(db, current_user.id, unread_only=unread_only, limit=limit)

@router.patch("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    return crud_notification.mark_read(db, current_user.id, notification_id)

@router.post("/read-all", response_model=SimpleMessage)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    count = crud_notification.mark_all_read(db, current_user.id)
    return SimpleMessage(message=f"Marked {count} notifications as read")
