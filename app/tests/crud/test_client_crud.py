import pytest
from sqlalchemy.orm import Session

from app.crud.client import (
    create_client,
    get_client,
    get_clients,
    update_client,
    create_access,
    update_access,
    reveal_password,
    delete_client,
)
from app.core.encryption import encrypt_secret, decrypt_secret, mask_secret, MASKED_VALUE
from app.models.client import ClientAccess
from app.core.exceptions import ClientNotFound, ClientValidationError

def test_encrypt_round_trip_and_mask():
    token = encrypt_secret("s3cret")
    assert token != "s3cret"
    assert decrypt_secret(token) == "s3cret"
    assert encrypt_secret("") is None
    assert decrypt_secret(None) is None
    assert mask_secret(token) == MASKED_VALUE
    assert mask_secret(None) is None

def test_clients_are_scoped_to_creator(db: Session, test_user, other_user):
    client = create_client(db, {"company_name": "Acme", "email": "hi@acme.test"}, test_user.id)
    assert client.status == "ACTIVE"
    assert [c.id for c in get_clients(db, test_user.id)] == [client.id]
    assert get_clients(db, other_user.id) == []
    with pytest.raises(ClientNotFound):
        get_client(db, client.id, other_user.id)

def test_update_client_status(db: Session, test_user):
    client = create_client(db, {"company_name": "Acme"}, test_user.id)
    update_client(db, client, {"status": "ARCHIVED", "phone": "+100"})
    assert client.status == "ARCHIVED"
    assert client.phone == "+100"
    with pytest.raises(ClientValidationError):
        update_client(db, client, {"company_name": " "})

def test_access_password_is_encrypted_at_rest(db: Session, test_user):
    client = create_client(db, {"company_name": "Acme"}, test_user.id)
    access = create_access(db, client, {"access_type": "ftp", "username": "deploy", "password": "hunter2"}, test_user.id)
    stored = db.query(ClientAccess).filter(ClientAccess.id == access.id).first()
    assert stored.password != "hunter2"
    assert reveal_password(db, stored, test_user.id) == "hunter2"

def test_masked_password_keeps_value_and_empty_clears(db: Session, test_user):
    client = create_client(db, {"company_name": "Acme"}, test_user.id)
    access = create_access(db, client, {"access_type": "cms", "password": "hunter2"}, test_user.id)

    update_access(db, access, {"password": MASKED_VALUE, "name": "Admin panel"})
    assert reveal_password(db, access, test_user.id) == "hunter2"
    assert access.name == "Admin panel"

    update_access(db, access, {"password": "new-pass"})
    assert reveal_password(db, access, test_user.id) == "new-pass"

    update_access(db, access, {"password": ""})
    assert access.password is None

def test_delete_client_removes_accesses(db: Session, test_user):
    client = create_client(db, {"company_name": "Acme"}, test_user.id)
    create_access(db, client, {"access_type": "ssh"}, test_user.id)
    delete_client(db, client)
    db.expire_all()
    assert db.query(ClientAccess).count() == 0
