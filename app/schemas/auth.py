#app/schemas/auth.py
from pydantic import BaseModel, Field
from typing import Optional

class LoginResponse(BaseModel):
    """
    LoginResponse — ответ на успешный логин (access + refresh).
    """
    access_token: str = Field(..., examples=["eyJhbGciOi..."], description="JWT access token")
    token_type: str = Field("bearer", examples=["bearer"], description="Тип токена")
    expires_in: int = Field(..., description="Время жизни access токена (секунды)", examples=[3600])
    refresh_token: Optional[str] = Field(None, examples=["eyJ0eXAiOiJKV..."], description="JWT refresh token")

class TokenRefreshRequest(BaseModel):
    """
    TokenRefreshRequest — тело запроса для обновления токена.
    """
    refresh_token: str = Field(..., examples=["eyJ0eXAiOiJKV..."], description="JWT refresh token")

class TokenRefreshResponse(BaseModel):
    """
    TokenRefreshResponse — ответ на обновление (новая пара access + refresh).
    """
    access_token: str = Field(..., examples=["eyJhbGciOi..."], description="JWT access token")
    token_type: str = Field("bearer", examples=["bearer"], description="Тип токена")
    expires_in: int = Field(..., description="Время жизни access токена (секунды)", examples=[3600])
    refresh_token: str = Field(..., examples=["eyJ0eXAiOiJKV..."], description="JWT refresh token")
