# app/core/permissions.py
"""
Единая точка проверки доступа к проекту и всему, что в нём лежит
(задачи, комментарии, записи времени, значения кастомных полей).

Уровни упорядочены: NONE < READ < WRITE < ADMIN.
- READ  — владелец, любой участник или публичный проект;
- WRITE — владелец или любой участник (публичность не даёт записи);
- ADMIN — владелец или участник с ролью OWNER/ADMIN.
Для задач ADMIN дополнительно получает её автор.

Отсутствие сущности и нехватка прав неразличимы снаружи: оба случая
поднимают NotFoundError (404).
"""
from enum import IntEnum
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ProjectNotFound, TaskNotFound
from app.models.project import Project, ProjectMember, MemberRole
from app.models.task import Task
from app.models.user import User

class AccessLevel(IntEnum):
    NONE = 0
    READ = 1
    WRITE = 2
    ADMIN = 3

ADMIN_ROLES = {MemberRole.OWNER.value, MemberRole.ADMIN.value}

def get_membership(db: Session, project_id: int, user_id: int) -> Optional[ProjectMember]:
    return (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        .first()
    )

def resolve_access(db: Session, user: User, project: Project) -> AccessLevel:
    """
    Вычислить уровень доступа пользователя к проекту.
    """
    if project.owner_id == user.id:
        return AccessLevel.ADMIN
    membership = get_membership(db, project.id, user.id)
    if membership is not None:
        if membership.role in ADMIN_ROLES:
            return AccessLevel.ADMIN
        return AccessLevel.WRITE
    if project.is_public:
        return AccessLevel.READ
    return AccessLevel.NONE

def resolve_task_access(db: Session, user: User, task: Task) -> AccessLevel:
    """
    Уровень доступа к задаче: как к её проекту, плюс ADMIN для автора задачи,
    пока у автора есть доступ на запись к проекту.
    """
    level = resolve_access(db, user, task.project)
    if task.creator_id == user.id and level >= AccessLevel.WRITE:
        return AccessLevel.ADMIN
    return level

def require_project_access(db: Session, user: User, project_id: int, level: AccessLevel) -> Project:
    project = db.query(Project).filter(Project.id == project_id).first()
    if project is None or resolve_access(db, user, project) < level:
        raise ProjectNotFound()
    return project

def require_task_access(db: Session, user: User, task_id: int, level: AccessLevel) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if task is None or resolve_task_access(db, user, task) < level:
        raise TaskNotFound()
    return task

def require_project_owner(db: Session, user: User, project_id: int) -> Project:
    """
    Изменение проекта и состава участников доступно только владельцу.
    """
    project = db.query(Project).filter(Project.id == project_id).first()
    if project is None or project.owner_id != user.id:
        raise ProjectNotFound()
    return project
