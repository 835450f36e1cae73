import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Tables are created per test below, not at application startup
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User, ROLE_ADMIN, ROLE_USER  # noqa: E402
from app.utils.security import create_user_token  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Precomputed bcrypt hash; these fixtures never log in with a password
DUMMY_PASSWORD_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.V2RqFi0W7e8y7e"


@pytest.fixture
def db_session():
    """Provide a clean database session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session, monkeypatch):
    """FastAPI test client with the database dependency overridden."""

    def override_get_db():
        test_db = TestingSessionLocal()
        try:
            yield test_db
        finally:
            test_db.close()

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setenv("AUTO_CREATE_TABLES", "false")

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db, None)


def make_user(session, email, name="Test User", role=ROLE_USER):
    user = User(email=email, password_hash=DUMMY_PASSWORD_HASH, name=name, role=role, is_active=True)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def headers_for(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def owner(db_session):
    """User X - creates the records under test"""
    return make_user(db_session, "owner@example.com", name="Owner X")


@pytest.fixture
def other_user(db_session):
    """User Y - neither owner nor admin"""
    return make_user(db_session, "other@example.com", name="Other Y")


@pytest.fixture
def admin(db_session):
    """User Z - admin account"""
    return make_user(db_session, "admin@example.com", name="Admin Z", role=ROLE_ADMIN)


@pytest.fixture
def owner_headers(owner):
    return headers_for(owner)


@pytest.fixture
def other_headers(other_user):
    return headers_for(other_user)


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


DIRECTOR_PAYLOAD = {
    "name": "Greta Gerwig",
    "nationality": "American",
    "birth_date": "1983-08-04",
    "bio": "Writer and director.",
}

ACTOR_PAYLOAD = {
    "name": "Saoirse Ronan",
    "nationality": "Irish",
    "birth_date": "1994-04-12",
    "bio": "Actor.",
    "image_url": "https://img.example.com/ronan.jpg",
}


def movie_payload(director_id, actor_ids=(), **overrides):
    payload = {
        "title": "Lady Bird",
        "genre": "Drama",
        "release_date": "2017-11-03",
        "duration": 120,
        "director": director_id,
        "actors": list(actor_ids),
        "rating": 7.5,
        "description": "A coming-of-age story.",
        "country": "USA",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def director_factory(client):
    def create(headers, **overrides):
        response = client.post("/api/directors", json={**DIRECTOR_PAYLOAD, **overrides}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return create


@pytest.fixture
def actor_factory(client):
    def create(headers, **overrides):
        response = client.post("/api/actors", json={**ACTOR_PAYLOAD, **overrides}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return create


@pytest.fixture
def movie_factory(client, director_factory):
    def create(headers, director_id=None, actor_ids=(), **overrides):
        if director_id is None:
            director_id = director_factory(headers)["id"]
        response = client.post(
            "/api/movies",
            json=movie_payload(director_id, actor_ids, **overrides),
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()
    return create
