import pytest
from fastapi.testclient import TestClient

from leadhub.app.core.dev_seed import ensure_admin
from leadhub.app.core.errors import InvalidArgumentError
from leadhub.app.db.base import Base
from leadhub.app.db.session import SessionLocal, engine
from leadhub.app.main import app
from leadhub.app.schemas.organization import OrganizationCreate
from leadhub.app.services import organizations


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def login_admin(client: TestClient, email: str, password: str) -> str:
    with SessionLocal() as db:
        ensure_admin(db, email, password)
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def org_payload(name: str, org_type: str = "company", segment: str = "B2B") -> dict:
    return {
        "name": name,
        "type": org_type,
        "segment": segment,
        "primary_contact": {"name": "Pat Contact", "email": "Pat@Example.com", "phone": "555"},
    }


def test_create_organization():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    response = client.post("/organizations", json=org_payload("Globex"), headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Globex"
    assert data["unique_code"].startswith("ORG-")
    assert len(data["unique_code"]) == 12
    assert data["status"] == "prospect"
    assert data["primary_contact_email"] == "pat@example.com"
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    assert data["owner_id"] == me["id"]


def test_school_gets_school_prefix():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    response = client.post(
        "/organizations",
        json=org_payload("Lincoln Elementary", "school", "B2E"),
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.json()["unique_code"].startswith("SCH-")


def test_duplicate_name_conflicts_case_insensitively():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.post("/organizations", json=org_payload("Initech"), headers=headers).status_code == 201
    response = client.post("/organizations", json=org_payload("INITECH"), headers=headers)
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_find_by_name_is_exact_not_pattern():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    client.post("/organizations", json=org_payload("Umbrella Corp"), headers={"Authorization": f"Bearer {token}"})
    with SessionLocal() as db:
        assert organizations.find_by_name(db, "umbrella corp") is not None
        assert organizations.find_by_name(db, "Umbrella%") is None
        assert organizations.find_by_name(db, "Umbrella_Corp") is None
        assert organizations.find_by_name(db, "Umbrella") is None


def test_lookup_by_code_is_public():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    created = client.post(
        "/organizations",
        json=org_payload("Hooli"),
        headers={"Authorization": f"Bearer {token}"},
    ).json()

    response = client.get(f"/organizations/code/{created['unique_code'].lower()}")
    assert response.status_code == 200
    assert response.json() == {
        "id": created["id"],
        "name": "Hooli",
        "type": "company",
        "unique_code": created["unique_code"],
    }
    assert client.get("/organizations/code/ORG-00000000").status_code == 404


def test_list_and_detail_organizations():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    client.post("/organizations", json=org_payload("Alpha Bank", "bank"), headers=headers)
    school = client.post("/organizations", json=org_payload("Beta School", "school", "B2E"), headers=headers).json()

    listed = client.get("/organizations", headers=headers).json()
    assert [o["name"] for o in listed] == ["Beta School", "Alpha Bank"]
    b2e = client.get("/organizations", params={"segment": "B2E"}, headers=headers).json()
    assert [o["name"] for o in b2e] == ["Beta School"]
    searched = client.get("/organizations", params={"search": "alpha"}, headers=headers).json()
    assert [o["name"] for o in searched] == ["Alpha Bank"]

    detail = client.get(f"/organizations/{school['id']}", headers=headers)
    assert detail.status_code == 200
    assert detail.json()["members"] == []
    assert client.get("/organizations/999", headers=headers).status_code == 404


def test_organizations_require_admin():
    client = TestClient(app)
    token = register_and_login(client, "user@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/organizations", headers=headers).status_code == 403
    assert client.post("/organizations", json=org_payload("Nope"), headers=headers).status_code == 403


def test_unknown_status_filter_returns_400():
    client = TestClient(app)
    token = login_admin(client, "admin@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/organizations", params={"status": "prospect"}, headers=headers).status_code == 200
    response = client.get("/organizations", params={"status": "bogus"}, headers=headers)
    assert response.status_code == 400
    assert "status" in response.json()["detail"]


def test_service_rejects_values_outside_vocabulary():
    data = OrganizationCreate.model_construct(
        name="Odd Co",
        type="spaceship",
        segment="B2B",
        primary_contact=None,
    )
    with SessionLocal() as db:
        with pytest.raises(InvalidArgumentError):
            organizations.build_organization(db, data, owner_id=1)
        with pytest.raises(InvalidArgumentError):
            organizations.search_organizations(db, segment="B2C")
        with pytest.raises(InvalidArgumentError):
            organizations.search_organizations(db, status="archived")
        assert organizations.search_organizations(db, segment="B2E", status="active") == []
