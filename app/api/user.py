#app/api/user.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from app.schemas.user import UserCreate, UserRead, UserShort
from app.crud.user import create_user, get_users
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as DBUser
from app.core.exceptions import DuplicateUser, UserValidationError

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("Taskboard.UsersAPI")

@router.get("/me", response_model=UserRead)
def read_users_me(current_user: DBUser = Depends(get_current_active_user)):
    """
    Профиль текущего пользователя.
    """
    return current_user

@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    data: UserCreate,
    db: Session = Depends(get_db),
):
    """
    Регистрация нового пользователя.
    """
    try:
        return create_user(db, data.model_dump())
    except DuplicateUser as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error registering user: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")

@router.get("/", response_model=List[UserShort])
def list_users(
    db: Session = Depends(get_db),
    current_user: DBUser = Depends(get_current_active_user)
):
    """
    Список пользователей для выбора участников и исполнителей.
    """
    return get_users(db)
