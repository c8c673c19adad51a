import pytest
from sqlalchemy.orm import Session

from app.crud.project import (
    create_project,
    update_project,
    delete_project,
    get_projects_for_user,
    get_visible_project_ids,
    add_member,
    update_member_role,
    remove_member,
    get_members,
    create_section,
    get_sections,
)
from app.crud.task import create_task
from app.models.project import Project
from app.models.task import Task
from app.core.exceptions import (
    ProjectValidationError,
    DuplicateMember,
    MemberNotFound,
    UserNotFound,
    AuthError,
)

def test_create_project_defaults(db: Session, test_user):
    project = create_project(db, {"name": "Launch"}, owner_id=test_user.id)
    assert project.owner_id == test_user.id
    assert project.color == "#4299E1"
    assert project.is_public is False
    assert [(s.name, s.order) for s in project.sections] == [("To Do", 0), ("In Progress", 1), ("Done", 2)]

def test_create_project_requires_name(db: Session, test_user):
    with pytest.raises(ProjectValidationError):
        create_project(db, {"name": "   "}, owner_id=test_user.id)

def test_create_project_with_foreign_client_fails(db: Session, test_user, other_user):
    from app.crud.client import create_client
    client = create_client(db, {"company_name": "Acme"}, other_user.id)
    with pytest.raises(ProjectValidationError):
        create_project(db, {"name": "Client work", "client_id": client.id}, owner_id=test_user.id)

def test_projects_for_user_and_visibility(db: Session, project, public_project, other_user, make_user, add_project_member):
    outsider = make_user("outsider")
    add_project_member(project, other_user)
    assert {p.id for p in get_projects_for_user(db, other_user.id)} == {project.id}
    assert set(get_visible_project_ids(db, other_user.id)) == {project.id, public_project.id}
    assert get_projects_for_user(db, outsider.id) == []
    assert get_visible_project_ids(db, outsider.id) == [public_project.id]

def test_update_project_partial(db: Session, project):
    update_project(db, project, {"description": "Updated", "is_public": True})
    assert project.description == "Updated"
    assert project.is_public is True
    assert project.name == "Private Project"

def test_members_lifecycle(db: Session, project, test_user, other_user):
    member = add_member(db, project, other_user.id)
    assert member.role == "MEMBER"
    with pytest.raises(DuplicateMember):
        add_member(db, project, other_user.id)
    with pytest.raises(DuplicateMember):
        add_member(db, project, test_user.id)
    with pytest.raises(UserNotFound):
        add_member(db, project, 9999)

    update_member_role(db, project, other_user.id, "ADMIN")
    assert get_members(db, project.id)[0].role == "ADMIN"

    with pytest.raises(AuthError):
        remove_member(db, project, test_user.id)
    remove_member(db, project, other_user.id)
    assert get_members(db, project.id) == []
    with pytest.raises(MemberNotFound):
        remove_member(db, project, other_user.id)

def test_create_section_appends_to_end(db: Session, project):
    section = create_section(db, project, {"name": "Backlog"})
    assert section.order == 3
    assert [s.name for s in get_sections(db, project.id)][-1] == "Backlog"

def test_delete_project_cascades_tasks(db: Session, project, test_user):
    create_task(db, project, {"title": "Doomed"}, actor_id=test_user.id)
    delete_project(db, project)
    db.expire_all()
    assert db.query(Project).count() == 0
    assert db.query(Task).count() == 0
