#app/schemas/client.py
from pydantic import BaseModel, Field, ConfigDict, constr
from typing import Optional, List
from app.schemas.types import UtcDatetime

from app.models.client import ClientStatus

class ClientBase(BaseModel):
    """
    ClientBase — карточка клиента.
    """
    company_name: constr(min_length=1, max_length=255) = Field(..., examples=["Acme Corp"], description="Название компании")
    contact_person: Optional[str] = Field(None, description="Контактное лицо")
    email: Optional[str] = Field(None, description="Email")
    phone: Optional[str] = Field(None, description="Телефон")
    address: Optional[str] = Field(None, description="Адрес")
    website_url: Optional[str] = Field(None, description="Сайт")
    notes: Optional[str] = Field(None, description="Заметки")
    status: ClientStatus = Field(ClientStatus.ACTIVE, description="ACTIVE, INACTIVE, ARCHIVED")

class ClientCreate(ClientBase):
    pass

class ClientUpdate(BaseModel):
    company_name: Optional[constr(min_length=1, max_length=255)] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    website_url: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ClientStatus] = None

class ProjectBrief(BaseModel):
    id: int
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)

class ClientRead(ClientBase):
    id: int
    created_by_id: int
    created_at: UtcDatetime
    updated_at: UtcDatetime
    projects: List[ProjectBrief] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class ClientAccessBase(BaseModel):
    """
    ClientAccessBase — сохранённый доступ клиента (хостинг, FTP, CMS...).
    """
    access_type: constr(min_length=1, max_length=64) = Field(..., examples=["hosting"], description="Тип доступа")
    name: Optional[str] = Field(None, description="Название")
    url: Optional[str] = Field(None, description="URL")
    username: Optional[str] = Field(None, description="Логин")
    port: Optional[int] = Field(None, ge=1, le=65535, description="Порт")
    notes: Optional[str] = Field(None, description="Заметки")

class ClientAccessCreate(ClientAccessBase):
    password: Optional[str] = Field(None, description="Пароль (хранится зашифрованным)")

class ClientAccessUpdate(BaseModel):
    """
    ClientAccessUpdate — маскированный пароль оставляет старое значение, пустая строка очищает.
    """
    access_type: Optional[constr(min_length=1, max_length=64)] = None
    name: Optional[str] = None
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    port: Optional[int] = Field(None, ge=1, le=65535)
    notes: Optional[str] = None

class ClientAccessRead(ClientAccessBase):
    id: int
    client_id: int
    password: Optional[str] = Field(None, description="Всегда маскирован")
    created_by_id: int
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)

class ClientAccessPassword(BaseModel):
    password: Optional[str] = Field(None, description="Расшифрованный пароль")
