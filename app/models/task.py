#app/models/task.py
import enum
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from app.models.base import Base, utcnow

class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    REVIEW = "REVIEW"
    DONE = "DONE"

class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

class Task(Base):
    """
    Task — задача проекта. Поддерживает сабтаски, секции, нескольких исполнителей.
    completed_at заполнен тогда и только тогда, когда status == DONE.
    """
    __tablename__ = "tasks"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID проекта")
    section_id: int = Column(Integer, ForeignKey("sections.id", ondelete="SET NULL"), nullable=True, index=True, doc="ID секции")
    parent_task_id: int = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True, index=True, doc="ID родительской задачи")
    creator_id: int = Column(Integer, ForeignKey("users.id"), nullable=False, index=True, doc="Автор задачи")
    title: str = Column(String(255), nullable=False, doc="Название задачи")
    description: str = Column(Text, nullable=True, doc="Описание")
    status: str = Column(String(24), nullable=False, default=TaskStatus.TODO.value, doc="Статус: TODO, IN_PROGRESS, REVIEW, DONE")
    priority: str = Column(String(16), nullable=False, default=TaskPriority.MEDIUM.value, doc="Приоритет: LOW, MEDIUM, HIGH, URGENT")
    due_date: datetime = Column(DateTime(timezone=True), nullable=True, doc="Срок")
    completed_at: datetime = Column(DateTime(timezone=True), nullable=True, doc="Когда задача перешла в DONE")
    order: int = Column(Integer, nullable=False, default=0, doc="Порядок внутри секции")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, doc="Дата изменения")

    project = relationship("Project", back_populates="tasks")
    section = relationship("Section", back_populates="tasks")
    creator = relationship("User", foreign_keys=[creator_id])

    # Сабтаски (self-referencing); при удалении родителя ссылка обнуляется
    parent = relationship("Task", remote_side=[id], back_populates="subtasks")
    subtasks = relationship("Task", back_populates="parent", order_by="Task.created_at")

    assignments = relationship("TaskAssignment", back_populates="task", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="task", cascade="all, delete-orphan", order_by="Comment.created_at")
    time_entries = relationship("TimeEntry", back_populates="task", cascade="all, delete-orphan")
    custom_field_values = relationship("CustomFieldValue", back_populates="task", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_tasks_due_date", "due_date"),
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_priority", "priority"),
    )

    @property
    def assigned_users(self):
        return [a.user for a in self.assignments]

    def __repr__(self):
        return (
            f"<Task(id={self.id}, title='{self.title}', status={self.status}, "
            f"project_id={self.project_id}, priority={self.priority}, due_date={self.due_date})>"
        )

class TaskAssignment(Base):
    """
    TaskAssignment — связь задача ↔ исполнитель (many-to-many).
    """
    __tablename__ = "task_assignments"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    task_id: int = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    task = relationship("Task", back_populates="assignments")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("task_id", "user_id", name="uq_task_assignments_task_user"),
    )

    def __repr__(self):
        return f"<TaskAssignment(task_id={self.task_id}, user_id={self.user_id})>"
