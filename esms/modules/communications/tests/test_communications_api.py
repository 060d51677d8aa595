from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from esms.app import create_app
from esms.modules._infra.repository import reset_engines
from esms.utils.timefmt import today_iso


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("ESMS_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("ESMS_DATABASE_URL", raising=False)
    reset_engines()
    yield TestClient(create_app())
    reset_engines()


def _grievance(**overrides):
    body = {
        "name": "Alberto",
        "company": "Subempreiteiro Lda",
        "date": "2024-04-02",
        "preferred_contact_method": "PHONE",
        "contact": "+258 84 000 0000",
        "preferred_language": "PORTUGUESE",
        "grievance_details": "Atraso no pagamento de salários",
    }
    body.update(overrides)
    return body


def _complaint(**overrides):
    body = {
        "number": "RC-001",
        "date_occurred": "2024-02-10",
        "local_occurrence": "Bairro Central",
        "description": "Poeira excessiva na estrada",
        "complainant_gender": "FEMALE",
        "anonymous_complaint": "NO",
        "telephone": "+258 82 000 0000",
        "claim_category": "NOISE",
    }
    body.update(overrides)
    return body


def test_grievance_links_acknowledging_person(client):
    person = client.post(
        "/api/responsible-persons",
        json={"name": "Helena", "role": "Oficial Social", "contact": "h@example.org", "date": "2024-01-01"},
    ).json()
    resp = client.post(
        "/api/worker-grievances",
        json=_grievance(
            acknowledged_by=person,
            acknowledged_by_name="Helena",
            acknowledged_by_position="Oficial Social",
        ),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["acknowledged_by_id"] == person["id"]
    assert body["acknowledged_by"]["role"] == "Oficial Social"


def test_grievance_other_language_only_kept_for_other(client):
    hidden = client.post(
        "/api/worker-grievances", json=_grievance(other_language="Macua")
    ).json()
    assert hidden["other_language"] is None
    shown = client.post(
        "/api/worker-grievances",
        json=_grievance(preferred_language="OTHER", other_language="Macua"),
    ).json()
    assert shown["other_language"] == "Macua"


def test_grievance_details_minimum_length(client):
    resp = client.post("/api/worker-grievances", json=_grievance(grievance_details="curto"))
    assert resp.status_code == 422
    assert "grievance_details" in resp.json()["fields"]


def test_complaint_defaults_and_closure(client):
    created = client.post("/api/complaints", json=_complaint()).json()
    assert created["status"] == "PENDING"
    assert created["registered_date"]
    assert created["days_to_closure"] is None

    closed = client.put(
        f"/api/complaints/{created['id']}",
        json=_complaint(status="COMPLETED", closing_date="2024-02-20"),
    ).json()
    assert closed["days_to_closure"] == 10


def test_completed_complaint_without_closing_date_never_closes_before_occurrence(client):
    past = client.post("/api/complaints", json=_complaint(status="COMPLETED")).json()
    assert past["closing_date"] == today_iso()
    assert past["days_to_closure"] >= 0

    future = client.post(
        "/api/complaints",
        json=_complaint(number="RC-002", date_occurred="2099-01-10", status="COMPLETED"),
    ).json()
    assert future["closing_date"] == "2099-01-10"
    assert future["days_to_closure"] == 0


def test_complaint_rejects_bad_email_and_closing_order(client):
    resp = client.post("/api/complaints", json=_complaint(email="not-an-email"))
    assert resp.status_code == 422
    assert "email" in resp.json()["fields"]

    resp = client.post("/api/complaints", json=_complaint(closing_date="2024-01-01"))
    assert resp.status_code == 422


def test_complaint_category_filter(client):
    client.post("/api/complaints", json=_complaint())
    client.post(
        "/api/complaints",
        json=_complaint(number="RC-002", claim_category="OTHER", other_claim_category="Vibração"),
    )
    others = client.get("/api/complaints", params={"claim_category": "OTHER"}).json()
    assert [row["other_claim_category"] for row in others] == ["Vibração"]
