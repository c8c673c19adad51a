#app/models/user.py
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime
)
from app.models.base import Base, utcnow

class User(Base):
    """
    User — аккаунт пользователя: логин, профиль, флаги активности и суперюзера.
    """
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)
    username: str = Column(String(50), unique=True, nullable=False, index=True, doc="Уникальный username")
    email: str = Column(String(255), unique=True, nullable=False, index=True, doc="Email")
    full_name: str = Column(String(128), nullable=True, doc="Полное имя")
    password_hash: str = Column(String(255), nullable=False, doc="Хэш пароля (никогда не хранить сырой пароль!)")
    is_active: bool = Column(Boolean, default=True, nullable=False, doc="Аккаунт активен")
    is_superuser: bool = Column(Boolean, default=False, nullable=False, doc="Является ли суперюзером")
    avatar_url: str = Column(String(255), nullable=True, doc="URL аватара пользователя")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, doc="Дата обновления")
    last_login_at: datetime = Column(DateTime(timezone=True), nullable=True, doc="Последний вход")

    def __repr__(self):
        return (
            f"<User(id={self.id}, username='{self.username}', email='{self.email}')>"
        )
