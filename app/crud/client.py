#app/crud/client.py
import logging
from typing import List
from sqlalchemy.orm import Session
from app.models.client import Client, ClientAccess
from app.core.encryption import encrypt_secret, decrypt_secret, MASKED_VALUE
from app.core.exceptions import ClientNotFound, ClientValidationError

logger = logging.getLogger("Taskboard.Clients")

CLIENT_FIELDS = ("company_name", "contact_person", "email", "phone", "address", "website_url", "notes", "status")
ACCESS_FIELDS = ("access_type", "name", "url", "username", "port", "notes")

def _enum_value(value):
    return getattr(value, "value", value)

def get_clients(db: Session, user_id: int) -> List[Client]:
    return (
        db.query(Client)
        .filter(Client.created_by_id == user_id)
        .order_by(Client.company_name)
        .all()
    )

def get_client(db: Session, client_id: int, user_id: int) -> Client:
    """
    Клиент виден только создавшему его пользователю.
    """
    client = db.query(Client).filter(Client.id == client_id, Client.created_by_id == user_id).first()
    if not client:
        raise ClientNotFound()
    return client

def create_client(db: Session, data: dict, user_id: int) -> Client:
    company_name = (data.get("company_name") or "").strip()
    if not company_name:
        raise ClientValidationError("Company name is required.")
    client = Client(created_by_id=user_id)
    for field in CLIENT_FIELDS:
        if field in data and data[field] is not None:
            setattr(client, field, _enum_value(data[field]))
    client.company_name = company_name
    db.add(client)
    db.commit()
    logger.info(f"Created client {client.id} by user {user_id}")
    return client

def update_client(db: Session, client: Client, data: dict) -> Client:
    if "company_name" in data:
        company_name = (data["company_name"] or "").strip()
        if not company_name:
            raise ClientValidationError("Company name cannot be empty.")
        data["company_name"] = company_name
    if data.get("status") is None:
        data.pop("status", None)
    for field in CLIENT_FIELDS:
        if field in data:
            setattr(client, field, _enum_value(data[field]))
    db.commit()
    logger.info(f"Updated client {client.id}")
    return client

def delete_client(db: Session, client: Client) -> None:
    """
    Удалить клиента вместе с доступами; проекты остаются без клиента.
    """
    client_id = client.id
    db.delete(client)
    db.commit()
    logger.info(f"Deleted client {client_id}")

# ==== Доступы ====

def get_accesses(db: Session, client: Client) -> List[ClientAccess]:
    return (
        db.query(ClientAccess)
        .filter(ClientAccess.client_id == client.id)
        .order_by(ClientAccess.created_at.desc(), ClientAccess.id.desc())
        .all()
    )

def get_access(db: Session, client: Client, access_id: int) -> ClientAccess:
    access = (
        db.query(ClientAccess)
        .filter(ClientAccess.id == access_id, ClientAccess.client_id == client.id)
        .first()
    )
    if not access:
        raise ClientNotFound("Client access not found")
    return access

def create_access(db: Session, client: Client, data: dict, user_id: int) -> ClientAccess:
    access_type = (data.get("access_type") or "").strip()
    if not access_type:
        raise ClientValidationError("Access type is required.")
    access = ClientAccess(client_id=client.id, created_by_id=user_id)
    for field in ACCESS_FIELDS:
        if field in data:
            setattr(access, field, data[field])
    access.access_type = access_type
    access.password = encrypt_secret(data.get("password"))
    db.add(access)
    db.commit()
    logger.info(f"Created access {access.id} ({access_type}) for client {client.id}")
    return access

def update_access(db: Session, access: ClientAccess, data: dict) -> ClientAccess:
    """
    Обновить доступ. Маскированный пароль означает «не менять», пустая строка очищает.
    """
    if "access_type" in data:
        access_type = (data["access_type"] or "").strip()
        if not access_type:
            raise ClientValidationError("Access type cannot be empty.")
        data["access_type"] = access_type
    for field in ACCESS_FIELDS:
        if field in data:
            setattr(access, field, data[field])
    if "password" in data and data["password"] != MASKED_VALUE:
        access.password = encrypt_secret(data["password"])
    db.commit()
    logger.info(f"Updated access {access.id} for client {access.client_id}")
    return access

def delete_access(db: Session, access: ClientAccess) -> None:
    access_id = access.id
    db.delete(access)
    db.commit()
    logger.info(f"Deleted access {access_id}")

def reveal_password(db: Session, access: ClientAccess, user_id: int):
    """
    Расшифровать пароль доступа. Каждое раскрытие пишется в лог.
    """
    logger.warning(f"User {user_id} revealed password of access {access.id} (client {access.client_id})")
    return decrypt_secret(access.password)
