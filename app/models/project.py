#app/models/project.py
import enum
from datetime import datetime
from app.models.base import Base, utcnow
from sqlalchemy import (
    Column, Integer, String, DateTime, Text, ForeignKey, Boolean, UniqueConstraint
)
from sqlalchemy.orm import relationship

class MemberRole(str, enum.Enum):
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

DEFAULT_PROJECT_COLOR = "#4299E1"
DEFAULT_SECTIONS = ("To Do", "In Progress", "Done")

class Project(Base):
    """
    Project — рабочее пространство с участниками, секциями, задачами и кастомными полями.
    """
    __tablename__ = "projects"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(128), nullable=False, index=True, doc="Название проекта")
    description: str = Column(Text, nullable=True, doc="Описание")
    color: str = Column(String(7), nullable=False, default=DEFAULT_PROJECT_COLOR, doc="Цветовая метка (#hex)")
    is_public: bool = Column(Boolean, default=False, nullable=False, doc="Виден всем пользователям на чтение")
    owner_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True, doc="Владелец проекта")
    client_id: int = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True, doc="Клиент")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, doc="Дата изменения")

    owner = relationship("User")
    client = relationship("Client", back_populates="projects")
    members = relationship("ProjectMember", back_populates="project", cascade="all, delete-orphan")
    sections = relationship("Section", back_populates="project", cascade="all, delete-orphan", order_by="Section.order")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")
    custom_fields = relationship("CustomField", back_populates="project", cascade="all, delete-orphan")

    def __repr__(self):
        return (
            f"<Project(id={self.id}, name='{self.name}', owner_id={self.owner_id}, is_public={self.is_public})>"
        )

class ProjectMember(Base):
    """
    ProjectMember — участие пользователя в проекте с ролью OWNER/ADMIN/MEMBER.
    """
    __tablename__ = "project_members"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role: str = Column(String(16), nullable=False, default=MemberRole.MEMBER.value, doc="Роль в проекте")
    joined_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )

    def __repr__(self):
        return f"<ProjectMember(project_id={self.project_id}, user_id={self.user_id}, role='{self.role}')>"

class Section(Base):
    """
    Section — колонка доски внутри проекта.
    """
    __tablename__ = "sections"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name: str = Column(String(128), nullable=False, doc="Название секции")
    order: int = Column(Integer, nullable=False, default=0, doc="Порядок на доске")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="sections")
    tasks = relationship("Task", back_populates="section")

    def __repr__(self):
        return f"<Section(id={self.id}, name='{self.name}', order={self.order})>"
