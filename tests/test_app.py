from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from esms.app import create_app


@pytest.fixture()
def client(data_dir):
    return TestClient(create_app())


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_missing_record_is_404_with_error(client):
    resp = client.get("/api/complaints/12345")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Complaint not found"}


def test_every_register_is_routed(client):
    for resource in (
        "departments",
        "subprojects",
        "document-types",
        "risks-and-impacts",
        "environmental-factors",
        "legal-requirements",
        "positions",
        "trainings",
        "toolbox-talks",
        "responsible-persons",
        "persons-involved",
        "investigation-participants",
        "immediate-actions",
        "impact-assessments",
        "incident-reports",
        "worker-grievances",
        "complaints",
        "documents",
        "training-matrix",
        "waste-transfer-log",
        "waste-management",
    ):
        resp = client.get(f"/api/{resource}")
        assert resp.status_code == 200, resource
        assert resp.json() == []


def test_audit_log_records_create_and_delete(client):
    created = client.post("/api/trainings", json={"name": "Combate a incêndios"}).json()
    client.delete(f"/api/trainings/{created['id']}")
    rows = client.get("/api/audit-logs", params={"limit": 2}).json()
    assert [row["action"] for row in rows] == ["delete", "create"]
    assert all(row["entity"] == "training" for row in rows)
    assert rows[1]["entity_id"] == created["id"]


def test_uploaded_files_are_served(client):
    url = client.post(
        "/api/upload", files={"file": ("nota.txt", b"ola", "text/plain")}
    ).json()["file_url"]
    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.content == b"ola"


def test_cors_headers(client):
    resp = client.get("/api/departments", headers={"Origin": "http://frontend.local"})
    assert resp.headers["access-control-allow-origin"] == "*"
