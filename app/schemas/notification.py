#app/schemas/notification.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from app.schemas.types import UtcDatetime

from app.models.notification import NotificationType

class NotificationRead(BaseModel):
    """
    NotificationRead — уведомление пользователя.
    """
    id: int
    type: NotificationType
    content: str
    read: bool
    related_item_id: Optional[int] = None
    related_item_type: Optional[str] = None
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)
