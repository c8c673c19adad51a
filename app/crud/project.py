# app/crud/project.py
from sqlalchemy.orm import Session
from sqlalchemy import or_, func, select
from sqlalchemy.exc import IntegrityError
from app.models.project import Project, ProjectMember, Section, MemberRole, DEFAULT_PROJECT_COLOR, DEFAULT_SECTIONS
from app.models.client import Client
from app.models.user import User
from app.core.exceptions import (
    ProjectValidationError,
    DuplicateMember,
    MemberNotFound,
    UserNotFound,
    AuthError,
)
import logging
from typing import List

logger = logging.getLogger("Taskboard.Projects")

def _check_client(db: Session, client_id, owner_id: int):
    if client_id is None:
        return
    client = db.query(Client).filter(Client.id == client_id, Client.created_by_id == owner_id).first()
    if not client:
        raise ProjectValidationError(f"Client {client_id} not found.")

def create_project(db: Session, data: dict, owner_id: int) -> Project:
    """
    Создаёт проект; создатель становится владельцем, добавляются секции по умолчанию.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ProjectValidationError("Project name is required.")
    _check_client(db, data.get("client_id"), owner_id)

    project = Project(
        name=name,
        description=data.get("description"),
        color=data.get("color") or DEFAULT_PROJECT_COLOR,
        is_public=bool(data.get("is_public", False)),
        owner_id=owner_id,
        client_id=data.get("client_id"),
    )
    project.sections = [Section(name=section_name, order=i) for i, section_name in enumerate(DEFAULT_SECTIONS)]
    db.add(project)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Failed to create project: {e}")
        raise ProjectValidationError("Database error while creating project.")
    logger.info(f"Created project {project.id} by user {owner_id}")
    return project

def member_project_ids_query(user_id: int):
    return select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)

def get_projects_for_user(db: Session, user_id: int) -> List[Project]:
    """
    Проекты, которыми пользователь владеет или в которых состоит.
    """
    return (
        db.query(Project)
        .filter(or_(Project.owner_id == user_id, Project.id.in_(member_project_ids_query(user_id))))
        .order_by(Project.updated_at.desc())
        .all()
    )

def get_visible_project_ids(db: Session, user_id: int) -> List[int]:
    """
    ID проектов, доступных пользователю на чтение (свои, участие, публичные).
    """
    rows = (
        db.query(Project.id)
        .filter(or_(
            Project.owner_id == user_id,
            Project.id.in_(member_project_ids_query(user_id)),
            Project.is_public == True,
        ))
        .all()
    )
    return [row[0] for row in rows]

def update_project(db: Session, project: Project, data: dict) -> Project:
    """
    Частичное обновление проекта. Передаются только заданные поля.
    """
    if "name" in data:
        name = (data["name"] or "").strip()
        if not name:
            raise ProjectValidationError("Project name cannot be empty.")
        data["name"] = name
    if data.get("color") is None:
        data.pop("color", None)
    if data.get("is_public") is None:
        data.pop("is_public", None)
    if "client_id" in data:
        _check_client(db, data["client_id"], project.owner_id)

    for field in ("name", "description", "color", "is_public", "client_id"):
        if field in data:
            setattr(project, field, data[field])
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Failed to update project {project.id}: {e}")
        raise ProjectValidationError("Database error while updating project.")
    logger.info(f"Updated project {project.id}")
    return project

def delete_project(db: Session, project: Project) -> None:
    """
    Удалить проект вместе с секциями, задачами, участниками и полями.
    """
    project_id = project.id
    db.delete(project)
    db.commit()
    logger.info(f"Deleted project {project_id}")

# ==== Участники ====

def get_members(db: Session, project_id: int) -> List[ProjectMember]:
    return (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project_id)
        .order_by(ProjectMember.joined_at)
        .all()
    )

def add_member(db: Session, project: Project, user_id: int, role: str = MemberRole.MEMBER.value) -> ProjectMember:
    """
    Добавить пользователя в проект. Повторное добавление — DuplicateMember.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFound()
    if project.owner_id == user_id:
        raise DuplicateMember("User is the owner of this project")
    existing = (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project.id, ProjectMember.user_id == user_id)
        .first()
    )
    if existing:
        raise DuplicateMember()

    member = ProjectMember(project_id=project.id, user_id=user_id, role=role)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateMember()
    logger.info(f"Added user {user_id} to project {project.id} as {role}")
    return member

def update_member_role(db: Session, project: Project, user_id: int, role: str) -> ProjectMember:
    member = (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project.id, ProjectMember.user_id == user_id)
        .first()
    )
    if not member:
        raise MemberNotFound()
    member.role = role
    db.commit()
    logger.info(f"Changed role of user {user_id} in project {project.id} to {role}")
    return member

def remove_member(db: Session, project: Project, user_id: int) -> None:
    """
    Удалить участника. Владельца удалить нельзя (AuthError → 403).
    """
    if project.owner_id == user_id:
        raise AuthError("Project owner cannot be removed from the project")
    member = (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project.id, ProjectMember.user_id == user_id)
        .first()
    )
    if not member:
        raise MemberNotFound()
    db.delete(member)
    db.commit()
    logger.info(f"Removed user {user_id} from project {project.id}")

# ==== Секции ====

def get_sections(db: Session, project_id: int) -> List[Section]:
    return db.query(Section).filter(Section.project_id == project_id).order_by(Section.order).all()

def create_section(db: Session, project: Project, data: dict) -> Section:
    name = (data.get("name") or "").strip()
    if not name:
        raise ProjectValidationError("Section name is required.")
    order = data.get("order")
    if order is None:
        max_order = db.query(func.max(Section.order)).filter(Section.project_id == project.id).scalar()
        order = 0 if max_order is None else max_order + 1
    section = Section(project_id=project.id, name=name, order=order)
    db.add(section)
    db.commit()
    logger.info(f"Created section {section.id} in project {project.id}")
    return section
