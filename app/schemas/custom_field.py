#app/schemas/custom_field.py
from pydantic import BaseModel, Field, ConfigDict, constr
from typing import Optional

from app.models.custom_field import CustomFieldType

class CustomFieldCreate(BaseModel):
    """
    CustomFieldCreate — новое кастомное поле проекта.
    """
    name: constr(min_length=1, max_length=128) = Field(..., examples=["Story points"], description="Название поля")
    type: CustomFieldType = Field(..., description="Тип поля")
    options: Optional[str] = Field(None, examples=["Low,Medium,High"], description="Варианты для DROPDOWN через запятую")
    required: bool = Field(False, description="Обязательное поле")

class CustomFieldRead(BaseModel):
    id: int
    project_id: int
    name: str
    type: CustomFieldType
    options: Optional[str] = None
    required: bool

    model_config = ConfigDict(from_attributes=True)

class CustomFieldValueSet(BaseModel):
    value: str = Field(..., description="Значение поля строкой")

class CustomFieldValueRead(BaseModel):
    id: int
    task_id: int
    field_id: int
    value: str
    field: CustomFieldRead

    model_config = ConfigDict(from_attributes=True)
