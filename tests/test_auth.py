import pytest

from app.models.user import User
from app.services.auth_service import AuthService
from app.utils.security import verify_password


def register(client, email="new@example.com", password="Password123", name="New User"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})


def test_register_creates_plain_user(client, db_session):
    response = register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "new@example.com"
    assert body["role"] == "user"
    assert "password_hash" not in body

    db_session.expire_all()
    user = db_session.query(User).filter(User.email == "new@example.com").first()
    assert verify_password("Password123", user.password_hash)


def test_register_duplicate_email_conflicts(client):
    assert register(client).status_code == 201
    response = register(client)

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_register_weak_password_is_400(client):
    response = register(client, password="password")

    assert response.status_code == 400
    assert "password" in response.json()["detail"]


def test_login_returns_token_usable_for_me(client):
    register(client)

    login = client.post("/api/auth/login", json={"email": "new@example.com", "password": "Password123"})
    assert login.status_code == 200
    body = login.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["role"] == "user"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"


def test_login_wrong_password_is_401(client):
    register(client)

    response = client.post("/api/auth/login", json={"email": "new@example.com", "password": "Wrong12345"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect email or password"


def test_catalog_requires_bearer_token(client):
    assert client.get("/api/movies").status_code in (401, 403)
    bad = client.get("/api/movies", headers={"Authorization": "Bearer not-a-token"})
    assert bad.status_code == 401


def test_set_role_promotes_existing_account(client, db_session):
    register(client)

    user = AuthService.set_role(db_session, "new@example.com", "admin")

    assert user.role == "admin"
    token = client.post("/api/auth/login", json={"email": "new@example.com", "password": "Password123"}).json()
    assert token["user"]["role"] == "admin"


def test_set_role_rejects_unknown_role_and_email(db_session):
    with pytest.raises(ValueError):
        AuthService.set_role(db_session, "new@example.com", "superuser")
    with pytest.raises(LookupError):
        AuthService.set_role(db_session, "missing@example.com", "admin")


def test_role_cannot_be_set_at_registration(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "sneaky@example.com", "password": "Password123", "name": "Sneaky", "role": "admin"},
    )

    assert response.status_code == 201
    assert response.json()["role"] == "user"


def test_register_blank_name_is_400(client):
    response = register(client, name="   ")

    assert response.status_code == 400
    assert response.json()["detail"].startswith("name:")


def test_register_name_is_trimmed(client):
    response = register(client, name="  Jo  ")

    assert response.status_code == 201
    assert response.json()["name"] == "Jo"
