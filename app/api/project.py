#app/api/project.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.schemas.project import (
    ProjectCreate, ProjectUpdate, ProjectRead, ProjectDetail,
    MemberCreate, MemberUpdate, MemberRead,
    SectionCreate, SectionRead,
)
from app.schemas.task import TaskCreate, TaskRead, TaskWithSubtasks
from app.schemas.custom_field import CustomFieldCreate, CustomFieldRead
from app.schemas.response import SimpleMessage
from app.crud import project as crud_project
from app.crud.task import create_task, get_project_tasks
from app.crud.custom_field import create_custom_field, get_custom_fields
from app.core.permissions import AccessLevel, require_project_access, require_project_owner
from app.core.exceptions import (
    ProjectValidationError,
    TaskValidationError,
    CustomFieldValidationError,
    DuplicateMember,
    AuthError,
)
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as UserModel

logger = logging.getLogger("Taskboard.ProjectsAPI")

router = APIRouter(prefix="/projects", tags=["Projects"])

@router.get("/", response_model=List[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Проекты, которыми пользователь владеет или в которых состоит.
    """
    return crud_project.get_projects_for_user(db, current_user.id)

@router.post("/", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
def create_new_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Создать проект (создатель становится владельцем).
    """
    try:
        return crud_project.create_project(db, data.model_dump(), owner_id=current_user.id)
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{project_id}", response_model=ProjectDetail)
def get_one_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    return require_project_access(db, current_user, project_id, AccessLevel.READ)

@router.patch("/{project_id}", response_model=ProjectRead)
def patch_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Обновить проект (только владелец).
    """
    project = require_project_owner(db, current_user, project_id)
    try:
        return crud_project.update_project(db, project, data.model_dump(exclude_unset=True))
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{project_id}", response_model=SimpleMessage)
def remove_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Удалить проект (только владелец).
    """
    project = require_project_owner(db, current_user, project_id)
    crud_project.delete_project(db, project)
    return SimpleMessage(message="Project deleted successfully")

# --- Участники ---

@router.get("/{project_id}/members", response_model=List[MemberRead])
def list_members(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_project_access(db, current_user, project_id, AccessLevel.READ)
    return crud_project.get_members(db, project_id)

@router.post("/{project_id}/members", response_model=MemberRead, status_code=status.HTTP_201_CREATED)
def add_project_member(
    project_id: int,
    data: MemberCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Добавить участника (только владелец). Повторно — 409.
    """
    project = require_project_owner(db, current_user, project_id)
    try:
        return crud_project.add_member(db, project, data.user_id, data.role.value)
    except DuplicateMember as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

@router.patch("/{project_id}/members/{user_id}", response_model=MemberRead)
def change_member_role(
    project_id: int,
    user_id: int,
    data: MemberUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    project = require_project_owner(db, current_user, project_id)
    return crud_project.update_member_role(db, project, user_id, data.role.value)

@router.delete("/{project_id}/members", response_model=SimpleMessage)
def remove_project_member(
    project_id: int,
    user_id: int = Query(..., description="ID удаляемого участника"),
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Удалить участника (только владелец). Владельца удалить нельзя — 403.
    """
    project = require_project_owner(db, current_user, project_id)
    try:
        crud_project.remove_member(db, project, user_id)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return SimpleMessage(message="Member removed successfully")

# --- Секции ---

@router.get("/{project_id}/sections", response_model=List[SectionRead])
def list_sections(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_project_access(db, current_user, project_id, AccessLevel.READ)
    return crud_project.get_sections(db, project_id)

@router.post("/{project_id}/sections", response_model=SectionRead, status_code=status.HTTP_201_CREATED)
def create_project_section(
    project_id: int,
    data: SectionCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    project = require_project_access(db, current_user, project_id, AccessLevel.WRITE)
    try:
        return crud_project.create_section(db, project, data.model_dump())
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# --- Задачи проекта ---

@router.get("/{project_id}/tasks", response_model=List[TaskWithSubtasks])
def list_project_tasks(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Задачи верхнего уровня вместе с сабтасками.
    """
    require_project_access(db, current_user, project_id, AccessLevel.READ)
    return get_project_tasks(db, project_id)

@router.post("/{project_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_project_task(
    project_id: int,
    data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Создать задачу в проекте.
    """
    project = require_project_access(db, current_user, project_id, AccessLevel.WRITE)
    try:
        return create_task(db, project, data.model_dump(), actor_id=current_user.id)
    except TaskValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

# --- Кастомные поля ---

@router.get("/{project_id}/custom-fields", response_model=List[CustomFieldRead])
def list_custom_fields(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    require_project_access(db, current_user, project_id, AccessLevel.READ)
    return get_custom_fields(db, project_id)

@router.post("/{project_id}/custom-fields", response_model=CustomFieldRead, status_code=status.HTTP_201_CREATED)
def create_project_custom_field(
    project_id: int,
    data: CustomFieldCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Создать кастомное поле (владелец или OWNER/ADMIN проекта).
    """
    project = require_project_access(db, current_user, project_id, AccessLevel.ADMIN)
    try:
        return create_custom_field(db, project, data.model_dump())
    except CustomFieldValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
