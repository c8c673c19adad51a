#app/crud/user.py
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.user import User
from app.core.security import get_password_hash, verify_password
from app.core.exceptions import DuplicateUser, UserValidationError
import logging

logger = logging.getLogger("Taskboard.Users")

def create_user(db: Session, data: dict) -> User:
    """
    Создать пользователя. Пароль хэшируется, username/email уникальны.
    """
    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password")
    if not username or not email or not password:
        raise UserValidationError("Username, email and password are required.")

    if db.query(User).filter(or_(User.username == username, User.email == email)).first():
        raise DuplicateUser()

    user = User(
        username=username,
        email=email,
        full_name=data.get("full_name"),
        avatar_url=data.get("avatar_url"),
        password_hash=get_password_hash(password),
        is_active=data.get("is_active", True),
        is_superuser=data.get("is_superuser", False),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Failed to create user '{username}': {e}")
        raise DuplicateUser()
    logger.info(f"Created user {user.id} ({user.username})")
    return user

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()

def get_users(db: Session) -> List[User]:
    """
    Все активные пользователи (для выбора исполнителей и участников).
    """
    return db.query(User).filter(User.is_active == True).order_by(User.username).all()

def get_users_by_ids(db: Session, user_ids) -> List[User]:
    ids = set(user_ids)
    if not ids:
        return []
    return db.query(User).filter(User.id.in_(ids)).all()

def authenticate_user(db: Session, login: str, password: str) -> Optional[User]:
    """
    Проверка логина: принимает username или email.
    """
    user = get_user_by_username(db, login) or get_user_by_email(db, login)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

def set_last_login(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    if not user:
        return
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
