#app/schemas/user.py
from pydantic import BaseModel, Field, EmailStr, ConfigDict, constr
from typing import Optional
from app.schemas.types import UtcDatetime

class UserBase(BaseModel):
    """
    UserBase — базовая схема пользователя (используется для create/read).
    """
    username: constr(min_length=3, max_length=50) = Field(..., examples=["john_doe"], description="Уникальный username")
    email: EmailStr = Field(..., examples=["john.doe@example.com"], description="Email пользователя")
    full_name: Optional[str] = Field(None, examples=["John Doe"], description="Полное имя")
    avatar_url: Optional[str] = Field(None, examples=["https://cdn.example.com/avatars/john.jpg"], description="URL аватара")

class UserCreate(UserBase):
    """
    UserCreate — регистрация пользователя (пароль обязателен).
    """
    password: constr(min_length=8) = Field(..., examples=["StrongPassw0rd!"], description="Пароль пользователя")

class UserRead(UserBase):
    """
    UserRead — схема для выдачи пользователя (response).
    """
    id: int
    is_active: bool
    is_superuser: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)

class UserShort(BaseModel):
    """
    UserShort — пользователь внутри других ответов (исполнители, авторы, участники).
    """
    id: int
    username: str
    full_name: Optional[str] = None
    email: str
    avatar_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
