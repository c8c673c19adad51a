from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.encryption import MASKED_VALUE
from app.models.client import ClientAccess

def _create_client(client: TestClient, headers: dict, name: str = "Acme Corp") -> dict:
    response = client.post("/clients/", json={"company_name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()

def _create_access(client: TestClient, headers: dict, client_id: int, **payload) -> dict:
    payload.setdefault("access_type", "hosting")
    response = client.post(f"/clients/{client_id}/accesses", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()

def test_client_crud(client: TestClient, normal_user_token_headers):
    created = _create_client(client, normal_user_token_headers)
    assert created["status"] == "ACTIVE"

    response = client.put(
        f"/clients/{created['id']}", json={"status": "ARCHIVED"}, headers=normal_user_token_headers,
    )
    assert response.json()["status"] == "ARCHIVED"
    assert [c["company_name"] for c in client.get("/clients/", headers=normal_user_token_headers).json()] == ["Acme Corp"]

    assert client.delete(f"/clients/{created['id']}", headers=normal_user_token_headers).status_code == 200
    assert client.get(f"/clients/{created['id']}", headers=normal_user_token_headers).status_code == 404

def test_clients_are_private(client: TestClient, normal_user_token_headers, other_user_token_headers):
    created = _create_client(client, normal_user_token_headers)
    assert client.get("/clients/", headers=other_user_token_headers).json() == []
    assert client.get(f"/clients/{created['id']}", headers=other_user_token_headers).status_code == 404
    assert client.get(f"/clients/{created['id']}/accesses", headers=other_user_token_headers).status_code == 404

def test_access_password_is_masked_and_encrypted(
    client: TestClient, db: Session, normal_user_token_headers,
):
    owner = _create_client(client, normal_user_token_headers)
    access = _create_access(
        client, normal_user_token_headers, owner["id"], username="admin", password="s3cr3t", port=22,
    )
    assert access["password"] == MASKED_VALUE

    stored = db.query(ClientAccess).filter(ClientAccess.id == access["id"]).first()
    assert stored.password and stored.password != "s3cr3t"

    listed = client.get(f"/clients/{owner['id']}/accesses", headers=normal_user_token_headers).json()
    assert [a["password"] for a in listed] == [MASKED_VALUE]

    response = client.post(
        f"/clients/{owner['id']}/accesses/{access['id']}/password", headers=normal_user_token_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"password": "s3cr3t"}

def test_update_access_with_masked_password_keeps_it(client: TestClient, normal_user_token_headers):
    owner = _create_client(client, normal_user_token_headers)
    access = _create_access(client, normal_user_token_headers, owner["id"], password="s3cr3t")
    url = f"/clients/{owner['id']}/accesses/{access['id']}"

    response = client.put(url, json={"password": MASKED_VALUE, "notes": "rotated later"}, headers=normal_user_token_headers)
    assert response.status_code == 200
    assert response.json()["notes"] == "rotated later"
    assert client.post(f"{url}/password", headers=normal_user_token_headers).json() == {"password": "s3cr3t"}

    client.put(url, json={"password": ""}, headers=normal_user_token_headers)
    assert client.get(url, headers=normal_user_token_headers).json()["password"] is None
    assert client.post(f"{url}/password", headers=normal_user_token_headers).json() == {"password": None}

def test_access_of_foreign_client_hidden(
    client: TestClient, normal_user_token_headers, other_user_token_headers,
):
    owner = _create_client(client, normal_user_token_headers)
    access = _create_access(client, normal_user_token_headers, owner["id"], password="s3cr3t")
    response = client.post(
        f"/clients/{owner['id']}/accesses/{access['id']}/password", headers=other_user_token_headers,
    )
    assert response.status_code == 404

def test_invalid_port_rejected(client: TestClient, normal_user_token_headers):
    owner = _create_client(client, normal_user_token_headers)
    response = client.post(
        f"/clients/{owner['id']}/accesses",
        json={"access_type": "ftp", "port": 70000},
        headers=normal_user_token_headers,
    )
    assert response.status_code == 400
