import pytest
from fastapi.testclient import TestClient

from leadhub.app.db.base import Base
from leadhub.app.db.session import SessionLocal, engine
from leadhub.app.main import app
from leadhub.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_successful_registration_returns_user():
    client = TestClient(app)
    payload = {"email": "user@example.com", "password": "secret", "full_name": "Una User"}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == payload["email"]
    assert data["full_name"] == "Una User"
    assert "password" not in data
    assert "hashed_password" not in data
    assert isinstance(data.get("id"), int)


def test_registration_never_grants_admin():
    client = TestClient(app)
    first = client.post("/auth/register", json={"email": "first@example.com", "password": "secret"}).json()
    second = client.post("/auth/register", json={"email": "second@example.com", "password": "secret"}).json()
    for user in (first, second):
        assert user["is_admin"] is False
        assert user["role"] == "b2c_user"

    token = client.post("/auth/login", json={"email": "first@example.com", "password": "secret"}).json()["access_token"]
    response = client.get("/leads", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_duplicate_email_returns_400():
    client = TestClient(app)
    first = client.post("/auth/register", json={"email": "dup@example.com", "password": "secret"})
    assert first.status_code == 200
    second = client.post("/auth/register", json={"email": "DUP@example.com", "password": "secret"})
    assert second.status_code == 400


def test_user_persisted_in_db():
    client = TestClient(app)
    payload = {"email": "persist@example.com", "password": "secret"}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 200

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == payload["email"]).first()
        assert user is not None
        assert user.hashed_password and user.hashed_password != payload["password"]
        assert user.is_email_verified is False
