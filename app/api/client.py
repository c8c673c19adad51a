#app/api/client.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from app.schemas.client import (
    ClientCreate, ClientUpdate, ClientRead,
    ClientAccessCreate, ClientAccessUpdate, ClientAccessRead, ClientAccessPassword,
)
from app.schemas.response import SimpleMessage
from app.crud import client as crud_client
from app.core.encryption import mask_secret
from app.core.exceptions import ClientValidationError
from app.dependencies import get_db, get_current_active_user
from app.models.user import User as UserModel

logger = logging.getLogger("Taskboard.ClientsAPI")

router = APIRouter(prefix="/clients", tags=["Clients"])

def _masked(access) -> ClientAccessRead:
    result = ClientAccessRead.model_validate(access)
    result.password = mask_secret(access.password)
    return result

@router.get("/", response_model=List[ClientRead])
def list_clients(
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    return crud_client.get_clients(db, current_user.id)

@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_new_client(
    data: ClientCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    try:
        return crud_client.create_client(db, data.model_dump(), current_user.id)
    except ClientValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{client_id}", response_model=ClientRead)
def get_one_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    return crud_client.get_client(db, client_id, current_user.id)

@router.put("/{client_id}", response_model=ClientRead)
def update_one_client(
    client_id: int,
    data: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    client = crud_client.get_client(db, client_id, current_user.id)
    try:
        return crud_client.update_client(db, client, data.model_dump(exclude_unset=True))
    except ClientValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.delete("/{client_id}", response_model=SimpleMessage)
def delete_one_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    client = crud_client.get_client(db, client_id, current_user.id)
    crud_client.delete_client(db, client)
    return SimpleMessage(message="Client deleted successfully")

# --- Доступы ---

@router.get("/{client_id}/accesses", response_model=List[ClientAccessRead])
def list_accesses(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Доступы клиента; пароли маскированы.
    """
    client = crud_client.get_client(db, client_id, current_user.id)
    return [_masked(a) for a in crud_client.get_accesses(db, client)]

@router.post("/{client_id}/accesses", response_model=ClientAccessRead, status_code=status.HTTP_201_CREATED)
def create_client_access(
    client_id: int,
    data: ClientAccessCreate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    client = crud_client.get_client(db, client_id, current_user.id)
    try:
        access = crud_client.create_access(db, client, data.model_dump(), current_user.id)
    except ClientValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _masked(access)

@router.get("/{client_id}/accesses/{access_id}", response_model=ClientAccessRead)
def get_client_access(
    client_id: int,
    access_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    client = crud_client.get_client(db, client_id, current_user.id)
    return _masked(crud_client.get_access(db, client, access_id))

@router.put("/{client_id}/accesses/{access_id}", response_model=ClientAccessRead)
def update_client_access(
    client_id: int,
    access_id: int,
    data: ClientAccessUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Обновить доступ. Маскированный пароль не меняет сохранённый, "" — очищает.
    """
    client = crud_client.get_client(db, client_id, current_user.id)
    access = crud_client.get_access(db, client, access_id)
    try:
        access = crud_client.update_access(db, access, data.model_dump(exclude_unset=True))
    except ClientValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return _masked(access)

@router.delete("/{client_id}/accesses/{access_id}", response_model=SimpleMessage)
def delete_client_access(
    client_id: int,
    access_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    client = crud_client.get_client(db, client_id, current_user.id)
    crud_client.delete_access(db, crud_client.get_access(db, client, access_id))
    return SimpleMessage(message="Access deleted successfully")

@router.post("/{client_id}/accesses/{access_id}/password", response_model=ClientAccessPassword)
def reveal_access_password(
    client_id: int,
    access_id: int,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_active_user),
):
    """
    Показать расшифрованный пароль доступа.
    """
    client = crud_client.get_client(db, client_id, current_user.id)
    access = crud_client.get_access(db, client, access_id)
    return ClientAccessPassword(password=crud_client.reveal_password(db, access, current_user.id))
