#app/schemas/time_entry.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from app.schemas.types import UtcDatetime

from app.schemas.user import UserShort

class TimeEntryCreate(BaseModel):
    """
    TimeEntryCreate — запуск таймера (без end_time) или ручная запись интервала.
    """
    description: Optional[str] = Field(None, description="Что делали")
    start_time: UtcDatetime = Field(..., description="Начало")
    end_time: Optional[UtcDatetime] = Field(None, description="Конец; пусто — таймер запущен")

class TimeEntryUpdate(BaseModel):
    description: Optional[str] = None
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None

class TimeEntryRead(BaseModel):
    id: int
    task_id: int
    user_id: int
    description: Optional[str] = None
    start_time: UtcDatetime
    end_time: Optional[UtcDatetime] = None
    duration: Optional[int] = Field(None, description="Длительность в секундах")
    created_at: UtcDatetime
    updated_at: UtcDatetime
    user: UserShort

    model_config = ConfigDict(from_attributes=True)
