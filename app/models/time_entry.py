#app/models/time_entry.py
from datetime import datetime
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

class TimeEntry(Base):
    """
    TimeEntry — интервал работы пользователя над задачей.
    Открытая запись (end_time IS NULL) у пользователя может быть только одна:
    это гарантирует частичный уникальный индекс.
    """
    __tablename__ = "time_entries"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    task_id: int = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    description: str = Column(Text, nullable=True, doc="Что делали")
    start_time: datetime = Column(DateTime(timezone=True), nullable=False, doc="Начало")
    end_time: datetime = Column(DateTime(timezone=True), nullable=True, doc="Конец (None — таймер запущен)")
    duration: int = Column(Integer, nullable=True, doc="Длительность в секундах")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    task = relationship("Task", back_populates="time_entries")
    user = relationship("User")

    __table_args__ = (
        Index(
            "uq_time_entries_open_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("end_time IS NULL"),
            postgresql_where=text("end_time IS NULL"),
        ),
    )

    def __repr__(self):
        return f"<TimeEntry(id={self.id}, task_id={self.task_id}, user_id={self.user_id}, duration={self.duration})>"
