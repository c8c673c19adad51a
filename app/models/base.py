#app/models/base.py
"""
Базовый класс для всех ORM-моделей проекта.

Использовать как Base при описании моделей:
    from app.models.base import Base
"""
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()

def utcnow() -> datetime:
    """Текущее время в UTC (default/onupdate для колонок с датами)."""
    return datetime.now(timezone.utc)
