import pytest
from sqlalchemy.orm import Session

from app.core.permissions import (
    AccessLevel,
    resolve_access,
    resolve_task_access,
    require_project_access,
    require_task_access,
    require_project_owner,
)
from app.core.exceptions import ProjectNotFound, TaskNotFound
from app.crud.task import create_task
from app.crud.project import remove_member

def test_owner_has_admin_access(db: Session, project, test_user):
    assert resolve_access(db, test_user, project) == AccessLevel.ADMIN

def test_stranger_has_no_access_to_private_project(db: Session, project, other_user):
    assert resolve_access(db, other_user, project) == AccessLevel.NONE
    with pytest.raises(ProjectNotFound):
        require_project_access(db, other_user, project.id, AccessLevel.READ)

def test_public_project_grants_read_only(db: Session, public_project, other_user):
    assert resolve_access(db, other_user, public_project) == AccessLevel.READ
    assert require_project_access(db, other_user, public_project.id, AccessLevel.READ).id == public_project.id
    with pytest.raises(ProjectNotFound):
        require_project_access(db, other_user, public_project.id, AccessLevel.WRITE)

@pytest.mark.parametrize("role, expected", [
    ("MEMBER", AccessLevel.WRITE),
    ("ADMIN", AccessLevel.ADMIN),
    ("OWNER", AccessLevel.ADMIN),
])
def test_member_role_levels(db: Session, project, other_user, add_project_member, role, expected):
    add_project_member(project, other_user, role)
    assert resolve_access(db, other_user, project) == expected

def test_task_creator_gets_admin_on_own_task(db: Session, project, test_user, other_user, add_project_member):
    add_project_member(project, other_user, "MEMBER")
    own_task = create_task(db, project, {"title": "Mine"}, actor_id=other_user.id)
    owner_task = create_task(db, project, {"title": "Owner's"}, actor_id=test_user.id)

    assert resolve_task_access(db, other_user, own_task) == AccessLevel.ADMIN
    assert resolve_task_access(db, other_user, owner_task) == AccessLevel.WRITE
    with pytest.raises(TaskNotFound):
        require_task_access(db, other_user, owner_task.id, AccessLevel.ADMIN)

def test_missing_task_is_not_found(db: Session, test_user):
    with pytest.raises(TaskNotFound):
        require_task_access(db, test_user, 424242, AccessLevel.READ)

def test_only_owner_passes_owner_check(db: Session, project, test_user, other_user, add_project_member):
    add_project_member(project, other_user, "ADMIN")
    assert require_project_owner(db, test_user, project.id).id == project.id
    with pytest.raises(ProjectNotFound):
        require_project_owner(db, other_user, project.id)

def test_removed_creator_loses_task_access(db: Session, project, public_project, test_user, other_user, add_project_member):
    add_project_member(project, other_user)
    add_project_member(public_project, other_user)
    private_task = create_task(db, project, {"title": "Private"}, actor_id=other_user.id)
    public_task = create_task(db, public_project, {"title": "Public"}, actor_id=other_user.id)

    remove_member(db, project, other_user.id)
    remove_member(db, public_project, other_user.id)
    db.expire_all()

    assert resolve_task_access(db, other_user, private_task) == AccessLevel.NONE
    assert resolve_task_access(db, other_user, public_task) == AccessLevel.READ
    with pytest.raises(TaskNotFound):
        require_task_access(db, other_user, private_task.id, AccessLevel.READ)
    with pytest.raises(TaskNotFound):
        require_task_access(db, other_user, public_task.id, AccessLevel.WRITE)
