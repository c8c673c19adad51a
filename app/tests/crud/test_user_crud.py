import pytest
from sqlalchemy.orm import Session

from app.crud import user as crud_user
from app.core.security import verify_password
from app.core.exceptions import DuplicateUser, UserValidationError
from app.schemas.user import UserCreate

def test_create_user_success(db: Session):
    user_in = UserCreate(username="newuser", email="NewUser@example.com", password="password123")
    user = crud_user.create_user(db, user_in.model_dump())
    assert user.id is not None
    assert user.username == "newuser"
    assert user.email == "newuser@example.com"
    assert user.is_active is True
    assert user.is_superuser is False
    assert user.password_hash != "password123"
    assert verify_password("password123", user.password_hash)

def test_create_user_duplicate_username(db: Session):
    crud_user.create_user(db, {"username": "dupuser", "email": "dup1@example.com", "password": "password123"})
    with pytest.raises(DuplicateUser, match="User with this username or email already exists."):
        crud_user.create_user(db, {"username": "dupuser", "email": "dup2@example.com", "password": "password456"})

def test_create_user_duplicate_email(db: Session):
    crud_user.create_user(db, {"username": "first", "email": "same@example.com", "password": "password123"})
    with pytest.raises(DuplicateUser):
        crud_user.create_user(db, {"username": "second", "email": "same@example.com", "password": "password123"})

def test_create_user_requires_password(db: Session):
    with pytest.raises(UserValidationError):
        crud_user.create_user(db, {"username": "nopass", "email": "nopass@example.com"})

def test_get_user_by_username_and_email(db: Session, test_user):
    assert crud_user.get_user(db, test_user.id).id == test_user.id
    assert crud_user.get_user_by_username(db, "testuser").id == test_user.id
    assert crud_user.get_user_by_email(db, "TESTUSER@example.com").id == test_user.id
    assert crud_user.get_user(db, 99999) is None
    assert crud_user.get_user_by_username(db, "nosuchuser") is None

def test_authenticate_user_by_username_or_email(db: Session, test_user):
    assert crud_user.authenticate_user(db, "testuser", "testpassword").id == test_user.id
    assert crud_user.authenticate_user(db, "testuser@example.com", "testpassword").id == test_user.id
    assert crud_user.authenticate_user(db, "testuser", "wrongpassword") is None
    assert crud_user.authenticate_user(db, "ghost", "testpassword") is None

def test_set_last_login(db: Session, test_user):
    assert test_user.last_login_at is None
    crud_user.set_last_login(db, test_user.id)
    db.expire_all()
    assert crud_user.get_user(db, test_user.id).last_login_at is not None
