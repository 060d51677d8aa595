from __future__ import annotations

import asyncio

import httpx
import pytest

from esms.forms.catalog import DOCUMENT_FORM, IMPACT_ASSESSMENT_FORM, INCIDENT_REPORT_FORM
from esms.forms.client import ApiClient, error_message
from esms.forms.form import ParentForm, ReadOnlyFieldError


def _offline_client() -> ApiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request {request.method} {request.url}")

    return ApiClient(transport=httpx.MockTransport(handler))


def test_significance_follows_its_inputs():
    form = ParentForm(IMPACT_ASSESSMENT_FORM, _offline_client())
    assert form.values["significance"] == "NONE"
    assert form.values["significance_state"] == "PENDING"

    form.set_value("intensity", "MEDIUM")
    form.set_value("probability", "DEFINITE")
    assert form.values["significance"] == "VERY_SIGNIFICANT"

    form.set_value("intensity", "LOW")
    assert form.values["significance"] == "NONE"
    assert form.values["significance_state"] == "UNCLASSIFIED"


def test_significance_is_read_only():
    form = ParentForm(IMPACT_ASSESSMENT_FORM, _offline_client())
    with pytest.raises(ReadOnlyFieldError):
        form.set_value("significance", "SIGNIFICANT")


def test_hidden_field_is_cleared_when_governing_value_changes():
    form = ParentForm(INCIDENT_REPORT_FORM, _offline_client())
    form.set_value("incident_type", "OTHER")
    form.set_value("other_incident_type", "Queda de árvore")
    assert form.is_visible("other_incident_type")

    form.set_value("incident_type", "ENVIRONMENTAL")
    assert form.values["other_incident_type"] is None
    assert not form.is_visible("other_incident_type")

    form.set_value("involves_contractor", "YES")
    form.set_value("contractor_name", "Construtora X")
    form.set_value("involves_contractor", "NO")
    assert form.values["contractor_name"] is None


def test_edit_form_prefills_from_record():
    record = {
        "id": 5,
        "code": "PG-1",
        "document_name": "Plano",
        "document_type": {"id": 2, "description": "Plano"},
        "document_state": "INUSE",
    }
    form = ParentForm(DOCUMENT_FORM, _offline_client(), record=record)
    assert form.is_edit
    assert form.values["code"] == "PG-1"
    assert form.slot("document_type").selected_ids() == [2]


def test_upload_failure_is_local_to_the_field():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(413, json={"error": "File too large"})

    async def scenario():
        form = ParentForm(DOCUMENT_FORM, ApiClient(transport=httpx.MockTransport(handler)))
        form.set_value("code", "PG-1")
        url = await form.attach_file("document_path", "big.pdf", b"x" * 10)
        return form, url

    form, url = asyncio.run(scenario())
    assert url is None
    assert form.values["document_path"] is None
    assert form.values["code"] == "PG-1"
    assert form.errors == {"document_path": "File too large"}
    assert form.notifier.texts() == ["File too large"]
    assert "document_path" not in form.uploading


def test_upload_stores_returned_url():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/upload"
        return httpx.Response(200, json={"file_url": "/uploads/abc_p.pdf"})

    async def scenario():
        form = ParentForm(DOCUMENT_FORM, ApiClient(transport=httpx.MockTransport(handler)))
        return form, await form.attach_file("document_path", "p.pdf", b"%PDF")

    form, url = asyncio.run(scenario())
    assert url == "/uploads/abc_p.pdf"
    assert form.values["document_path"] == url


def test_attach_to_non_file_field_is_rejected():
    form = ParentForm(DOCUMENT_FORM, _offline_client())
    with pytest.raises(KeyError):
        asyncio.run(form.attach_file("code", "x.txt", b""))


@pytest.mark.parametrize(
    "body,expected",
    [
        ({"error": "duplicate"}, "duplicate"),
        ({"message": "Not allowed"}, "Not allowed"),
        ({"error": "", "message": "fallback to message"}, "fallback to message"),
        ({"detail": "Not Found"}, "Not Found"),
        ({"detail": [{"msg": "bad"}]}, "generic"),
        (["unexpected"], "generic"),
    ],
)
def test_error_message_precedence(body, expected):
    response = httpx.Response(400, json=body)
    assert error_message(response, "generic") == expected


def test_error_message_without_json_body():
    assert error_message(httpx.Response(502, text="Bad Gateway"), "generic") == "generic"


def test_transport_failure_becomes_api_error():
    from esms.forms.client import ApiError

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def scenario():
        client = ApiClient(transport=httpx.MockTransport(handler))
        with pytest.raises(ApiError) as info:
            await client.get_json("/api/departments")
        return info.value

    err = asyncio.run(scenario())
    assert err.status == 0
    assert err.message == "Failed to load data"
