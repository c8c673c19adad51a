#app/schemas/response.py
from pydantic import BaseModel, Field
from typing import Any

class ErrorResponse(BaseModel):
    """
    ErrorResponse — стандартная структура для ошибки: {"error": ...}.
    """
    error: Any = Field(..., examples=["Task not found"], description="Сообщение или список ошибок валидации")

class SimpleMessage(BaseModel):
    """
    SimpleMessage — простое сообщение для подтверждения действия.
    """
    message: str = Field(..., examples=["Action completed successfully"], description="Текстовое сообщение")
