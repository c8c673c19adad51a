#app/schemas/project.py
from pydantic import BaseModel, Field, ConfigDict, constr
from typing import Optional, List
from app.schemas.types import UtcDatetime

from app.models.project import MemberRole, DEFAULT_PROJECT_COLOR
from app.schemas.user import UserShort

HexColor = constr(pattern=r"^#[0-9A-Fa-f]{6}$")

class ProjectBase(BaseModel):
    """
    ProjectBase — базовая схема проекта.
    """
    name: constr(min_length=1, max_length=128) = Field(..., examples=["Website redesign"], description="Название проекта")
    description: Optional[str] = Field(None, examples=["Q3 marketing site"], description="Описание")
    color: HexColor = Field(DEFAULT_PROJECT_COLOR, examples=["#4299E1"], description="Цветовая метка (HEX)")
    is_public: bool = Field(False, description="Виден всем пользователям на чтение")
    client_id: Optional[int] = Field(None, description="ID клиента")

class ProjectCreate(ProjectBase):
    """
    ProjectCreate — схема для создания проекта (владелец выставляется на сервере).
    """
    pass

class ProjectUpdate(BaseModel):
    """
    ProjectUpdate — схема для обновления проекта (все поля опциональны).
    """
    name: Optional[constr(min_length=1, max_length=128)] = None
    description: Optional[str] = None
    color: Optional[HexColor] = None
    is_public: Optional[bool] = None
    client_id: Optional[int] = None

class SectionCreate(BaseModel):
    name: constr(min_length=1, max_length=128) = Field(..., examples=["Backlog"], description="Название секции")
    order: Optional[int] = Field(None, description="Позиция; по умолчанию в конец")

class SectionRead(BaseModel):
    id: int
    project_id: int
    name: str
    order: int

    model_config = ConfigDict(from_attributes=True)

class MemberCreate(BaseModel):
    user_id: int = Field(..., description="ID пользователя")
    role: MemberRole = Field(MemberRole.MEMBER, description="Роль в проекте")

class MemberUpdate(BaseModel):
    role: MemberRole = Field(..., description="Новая роль")

class MemberRead(BaseModel):
    id: int
    project_id: int
    user_id: int
    role: MemberRole
    joined_at: UtcDatetime
    user: UserShort

    model_config = ConfigDict(from_attributes=True)

class ProjectRead(ProjectBase):
    """
    ProjectRead — полная схема проекта для ответа (response).
    """
    id: int
    owner_id: int
    created_at: UtcDatetime
    updated_at: UtcDatetime
    owner: UserShort

    model_config = ConfigDict(from_attributes=True)

class ProjectDetail(ProjectRead):
    """
    ProjectDetail — проект вместе с участниками и секциями.
    """
    members: List[MemberRead] = Field(default_factory=list)
    sections: List[SectionRead] = Field(default_factory=list)
