#app/models/notification.py
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

class NotificationType(str, enum.Enum):
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_COMPLETED = "TASK_COMPLETED"
    COMMENT_ADDED = "COMMENT_ADDED"
    MENTIONED = "MENTIONED"

class Notification(Base):
    """
    Notification — событие для пользователя (назначение, завершение, комментарий, упоминание).
    """
    __tablename__ = "notifications"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    recipient_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type: str = Column(String(32), nullable=False)
    content: str = Column(Text, nullable=False)
    read: bool = Column(Boolean, default=False, nullable=False)
    related_item_id: int = Column(Integer, nullable=True, doc="ID связанной сущности")
    related_item_type: str = Column(String(32), nullable=True, doc="Тип связанной сущности (task, comment)")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    recipient = relationship("User")

    def __repr__(self):
        return f"<Notification(id={self.id}, recipient_id={self.recipient_id}, type='{self.type}', read={self.read})>"
