import pytest
from fastapi.testclient import TestClient

from leadhub.app.core.dev_seed import ensure_admin
from leadhub.app.db.base import Base
from leadhub.app.db.session import SessionLocal, engine
from leadhub.app.main import app
from leadhub.app.models.lead import Lead
from leadhub.app.models.timeline import TimelineEvent


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


def create_lead(client: TestClient, token: str, payload: dict):
    return client.post("/leads", json=payload, headers={"Authorization": f"Bearer {token}"})


def lead_payload(**overrides) -> dict:
    payload = {
        "name": "Maria Lopez",
        "email": "Maria@Example.com",
        "phone": "+34 600 000 000",
        "organization_name": "Lopez Logistics",
        "job_title": "CISO",
        "segment": "B2B",
    }
    payload.update(overrides)
    return payload


def test_create_lead_success():
    client = TestClient(app)
    token = login_admin(client, "lead@example.com", "secret")
    response = create_lead(client, token, lead_payload())
    assert response.status_code == 200
    data = response.json()
    assert isinstance(data.get("id"), int)
    assert data["email"] == "maria@example.com"
    assert data["source"] == "manual"
    assert data["status"] == "new"
    assert data["engagement_count"] == 0
    assert data["demo_status"] == "none"
    assert data["quote_status"] == "none"
    assert data["compliance_tags"] == []
    assert data["linked_trial_ids"] == []

    with SessionLocal() as db:
        events = db.query(TimelineEvent).filter(TimelineEvent.lead_id == data["id"]).all()
        assert [e.event_type for e in events] == ["created"]


def test_create_decision_maker_starts_hot():
    client = TestClient(app)
    token = login_admin(client, "lead@example.com", "secret")
    data = create_lead(client, token, lead_payload(is_decision_maker=True)).json()
    assert data["status"] == "hot"


def test_create_lead_requires_auth():
    client = TestClient(app)
    response = client.post("/leads", json=lead_payload())
    assert response.status_code == 401


def test_non_admin_cannot_manage_leads():
    client = TestClient(app)
    token = register_and_login(client, "customer@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.post("/leads", json=lead_payload(), headers=headers).status_code == 403
    assert client.get("/leads", headers=headers).status_code == 403


def test_invalid_segment_rejected():
    client = TestClient(app)
    token = login_admin(client, "invalid@example.com", "secret")
    response = create_lead(client, token, lead_payload(segment="B2X"))
    assert response.status_code == 422


def test_list_leads_filters_and_search():
    client = TestClient(app)
    token = login_admin(client, "list@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    create_lead(client, token, lead_payload())
    create_lead(client, token, lead_payload(name="Tom School", email="tom@school.example.com", segment="B2E", organization_name="Hill School"))
    create_lead(client, token, lead_payload(name="Urgent Ursula", email="ursula@example.com", has_urgent_need=True))

    all_leads = client.get("/leads", headers=headers).json()
    assert len(all_leads) == 3
    assert all_leads[0]["name"] == "Urgent Ursula"

    b2e = client.get("/leads", params={"segment": "B2E"}, headers=headers).json()
    assert [lead["name"] for lead in b2e] == ["Tom School"]

    hot = client.get("/leads", params={"status": "hot"}, headers=headers).json()
    assert [lead["name"] for lead in hot] == ["Urgent Ursula"]

    by_org = client.get("/leads", params={"search": "hill"}, headers=headers).json()
    assert [lead["name"] for lead in by_org] == ["Tom School"]

    ascending = client.get("/leads", params={"sort_order": "asc", "limit": 1}, headers=headers).json()
    assert [lead["name"] for lead in ascending] == ["Maria Lopez"]


def test_search_treats_wildcards_literally():
    client = TestClient(app)
    token = login_admin(client, "search@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    create_lead(client, token, lead_payload(organization_name="100% Secure"))
    create_lead(client, token, lead_payload(name="Other", email="other@example.com", organization_name="Plain Co"))

    percent = client.get("/leads", params={"search": "%"}, headers=headers).json()
    assert [lead["organization_name"] for lead in percent] == ["100% Secure"]
    underscore = client.get("/leads", params={"search": "_"}, headers=headers).json()
    assert underscore == []


def test_invalid_sort_order_rejected():
    client = TestClient(app)
    token = login_admin(client, "sort@example.com", "secret")
    response = client.get("/leads", params={"sort_order": "sideways"}, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 400


def test_get_update_and_delete_lead():
    client = TestClient(app)
    token = login_admin(client, "crud@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    lead_id = create_lead(client, token, lead_payload()).json()["id"]
    client.post(f"/leads/{lead_id}/notes", json={"text": "Intro call"}, headers=headers)

    fetched = client.get(f"/leads/{lead_id}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["notes"][0]["text"] == "Intro call"

    updated = client.put(
        f"/leads/{lead_id}",
        json={"job_title": "CTO", "email": "NEW@example.com", "has_urgent_need": True},
        headers=headers,
    )
    assert updated.status_code == 200
    data = updated.json()
    assert data["job_title"] == "CTO"
    assert data["email"] == "new@example.com"
    assert data["name"] == "Maria Lopez"
    assert data["status"] == "hot"

    deleted = client.delete(f"/leads/{lead_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"status": "deleted", "id": lead_id}
    assert client.get(f"/leads/{lead_id}", headers=headers).status_code == 404

    with SessionLocal() as db:
        assert db.query(Lead).count() == 0
        assert db.query(TimelineEvent).count() == 0


def test_missing_lead_returns_404():
    client = TestClient(app)
    token = login_admin(client, "missing@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/leads/404", headers=headers).status_code == 404
    assert client.put("/leads/404", json={"name": "x"}, headers=headers).status_code == 404
    assert client.delete("/leads/404", headers=headers).status_code == 404
