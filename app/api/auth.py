#app/api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.schemas.auth import (
    LoginResponse,
    TokenRefreshRequest,
    TokenRefreshResponse,
)
from app.schemas.user import UserRead
from app.crud.user import (
    authenticate_user,
    get_user_by_username,
    set_last_login,
)
from app.core.security import (
    create_access_token,
    create_refresh_token,
    verify_refresh_token
)
from app.dependencies import get_db, get_current_active_user
from app.core.settings import settings
from datetime import timedelta
import logging

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("Taskboard.Auth")

ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
REFRESH_TOKEN_EXPIRE_DAYS = settings.REFRESH_TOKEN_EXPIRE_DAYS

def _issue_tokens(user) -> tuple[str, str]:
    access_token_str, _ = create_access_token(
        data={"sub": user.username, "user_id": user.id},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    refresh_token_str, _, _ = create_refresh_token(
        data={"sub": user.username, "user_id": user.id},
        expires_delta=timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)
    )
    return access_token_str, refresh_token_str

@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Логин по username/email + password.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user or not user.is_active:
        logger.info(f"Failed login attempt for '{form_data.username}'")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")

    access_token_str, refresh_token_str = _issue_tokens(user)
    set_last_login(db, user.id)
    return LoginResponse(
        access_token=access_token_str,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        refresh_token=refresh_token_str
    )

@router.post("/refresh", response_model=TokenRefreshResponse, status_code=status.HTTP_200_OK)
def refresh_token(
    data: TokenRefreshRequest,
    db: Session = Depends(get_db),
):
    """
    Выдать новую пару access/refresh по refresh_token.
    """
    payload = verify_refresh_token(data.refresh_token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token payload")

    user = get_user_by_username(db, payload["sub"])
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")

    access_token_str, refresh_token_str = _issue_tokens(user)
    return TokenRefreshResponse(
        access_token=access_token_str,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        refresh_token=refresh_token_str
    )

@router.get("/me", response_model=UserRead)
def get_me(current_user=Depends(get_current_active_user)):
    """
    Получить данные текущего пользователя.
    """
    return current_user
