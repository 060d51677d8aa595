from __future__ import annotations

import asyncio
import json
import logging

import httpx
from pydantic import BaseModel

from esms.forms.catalog import ENTITY_KINDS, WORKER_GRIEVANCE_FORM
from esms.forms.client import ApiClient
from esms.forms.form import FormDefinition, LinkStatus, ParentForm
from esms.forms.resolver import SlotSpec, SlotState
from esms.modules._infra.links import LinkRef


class ThingCreate(BaseModel):
    title: str
    notes: str = ""
    department: LinkRef
    participants: list[LinkRef] = []


THING_FORM = FormDefinition(
    resource="things",
    create_schema=ThingCreate,
    slots=(
        SlotSpec("department", ENTITY_KINDS["departments"], required=True),
        SlotSpec("participants", ENTITY_KINDS["investigation-participants"], multi=True),
    ),
)

DEPARTMENTS = [{"id": 1, "name": "Ambiente", "description": "x"}]


class FakeApi:
    """Scripted responses keyed by (method, path); records every request."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        status, body = self.routes[(request.method, request.url.path)]
        if callable(body):
            body = body(json.loads(request.content or b"null"))
        return httpx.Response(status, json=body)

    def client(self) -> ApiClient:
        return ApiClient(transport=httpx.MockTransport(self))

    def count(self, method):
        return sum(1 for m, _ in self.calls if m == method)


def _api(extra=None):
    routes = {
        ("GET", "/api/departments"): (200, list(DEPARTMENTS)),
        ("GET", "/api/investigation-participants"): (200, []),
    }
    routes.update(extra or {})
    return FakeApi(routes)


def test_load_fills_every_slot_then_becomes_ready():
    api = _api()

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        assert form.ready is False
        await form.load()
        return form

    form = asyncio.run(scenario())
    assert form.ready is True
    assert form.slot("department").labels() == [(1, "Ambiente")]
    assert form.slot("participants").options == []
    assert sorted(api.calls) == [
        ("GET", "/api/departments"),
        ("GET", "/api/investigation-participants"),
    ]


def test_failed_list_fetch_is_local_to_its_slot():
    api = _api({("GET", "/api/departments"): (503, {"message": "Service unavailable"})})

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        return form

    form = asyncio.run(scenario())
    assert form.ready is True
    assert form.slot("department").options == []
    assert form.slot("department").state is SlotState.IDLE
    assert form.notifier.texts() == ["Service unavailable"]


def test_inline_create_writes_entity_into_parent_field():
    created = {"id": 7, "name": "Social", "description": "Relações comunitárias"}
    api = _api(
        {
            ("GET", "/api/departments"): (200, []),
            ("POST", "/api/departments"): (201, created),
        }
    )

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        form.set_value("title", "Plano")
        before = {k: v for k, v in form.values.items() if k != "department"}
        slot = form.slot("department")
        dialog = slot.begin_create()
        assert slot.state is SlotState.CREATING
        result = await dialog.submit({"name": "Social", "description": "Relações comunitárias"})
        after = {k: v for k, v in form.values.items() if k != "department"}
        return form, slot, dialog, result, before, after

    form, slot, dialog, result, before, after = asyncio.run(scenario())
    assert result == created
    assert created in slot.options
    assert form.values["department"] == created
    assert dialog.is_open is False
    assert slot.dialog is None
    assert slot.state is SlotState.IDLE
    assert before == after
    assert api.count("GET") == 2
    assert [e.status for e in form.ledger.entries] == [LinkStatus.PENDING]


def test_server_error_on_create_shows_text_and_keeps_dialog_open():
    api = _api({("POST", "/api/departments"): (500, {"error": "duplicate"})})

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        dialog = form.slot("department").begin_create()
        result = await dialog.submit({"name": "Ambiente", "description": "x"})
        return form, dialog, result

    form, dialog, result = asyncio.run(scenario())
    assert result is None
    assert form.notifier.last.message == "duplicate"
    assert dialog.is_open is True
    assert form.slot("department").state is SlotState.CREATING
    assert form.values["department"] is None
    assert form.slot("department").options == DEPARTMENTS


def test_invalid_child_input_makes_no_request():
    api = _api()

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        dialog = form.slot("department").begin_create()
        await dialog.submit({"name": ""})
        return dialog

    dialog = asyncio.run(scenario())
    assert set(dialog.errors) == {"name", "description"}
    assert dialog.is_open is True
    assert api.calls == []


def test_cancel_create_returns_to_idle():
    form = ParentForm(THING_FORM, _api().client())
    slot = form.slot("department")
    dialog = slot.begin_create()
    slot.cancel_create()
    assert dialog.is_open is False
    assert slot.state is SlotState.IDLE
    assert form.values["department"] is None


def test_toggle_twice_restores_selection():
    participants = [{"id": 3, "name": "Rui"}, {"id": 4, "name": "Ana"}]
    api = _api({("GET", "/api/investigation-participants"): (200, participants)})

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        return form

    form = asyncio.run(scenario())
    slot = form.slot("participants")
    slot.toggle(3)
    start = list(form.values["participants"])
    slot.toggle(4)
    slot.toggle(4)
    assert form.values["participants"] == start
    slot.toggle(4)
    assert slot.selected_ids() == [3, 4]
    slot.toggle(3)
    assert slot.selected_ids() == [4]


def test_required_slot_blocks_submission_without_requests():
    api = _api()

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        form.set_value("title", "Plano")
        sent_before = len(api.calls)
        result = await form.submit()
        return form, result, sent_before

    form, result, sent_before = asyncio.run(scenario())
    assert result is None
    assert "department" in form.errors
    assert len(api.calls) == sent_before
    assert form.is_open is True


def test_submit_posts_ids_and_closes_form():
    saved_payloads = []

    def echo(payload):
        saved_payloads.append(payload)
        return {"id": 11, **payload}

    api = _api({("POST", "/api/things"): (201, echo)})
    refreshed = []

    async def scenario():
        async def on_success(record):
            refreshed.append(record["id"])

        form = ParentForm(THING_FORM, api.client(), on_success=on_success)
        await form.load()
        form.set_value("title", "Plano")
        form.slot("department").select(1)
        return form, await form.submit()

    form, saved = asyncio.run(scenario())
    assert saved["id"] == 11
    assert saved_payloads == [
        {"title": "Plano", "notes": "", "department": {"id": 1}, "participants": []}
    ]
    assert refreshed == [11]
    assert form.is_open is False
    assert form.notifier.last.message == "Record saved"


def test_failed_submit_keeps_form_and_orphans_new_children(caplog):
    created = {"id": 9, "name": "Social", "description": "x"}
    outcomes = [(500, {"error": "database locked"}), (201, {"id": 20})]

    api = _api({("POST", "/api/departments"): (201, created)})

    async def scenario():
        form = ParentForm(THING_FORM, api.client())
        await form.load()
        form.set_value("title", "Plano")
        await form.slot("department").begin_create().submit({"name": "Social", "description": "x"})

        api.routes[("POST", "/api/things")] = outcomes.pop(0)
        with caplog.at_level(logging.ERROR, logger="esms.forms.form"):
            first = await form.submit()
        statuses_after_failure = [e.status for e in form.ledger.entries]
        values_after_failure = dict(form.values)

        api.routes[("POST", "/api/things")] = outcomes.pop(0)
        second = await form.submit()
        return form, first, statuses_after_failure, values_after_failure, second

    form, first, failed_statuses, values_after_failure, second = asyncio.run(scenario())
    assert first is None
    assert failed_statuses == [LinkStatus.ORPHANED]
    assert values_after_failure["department"] == created
    assert values_after_failure["title"] == "Plano"
    assert "database locked" in form.notifier.texts()
    assert any("Orphaned departments 9" in r.getMessage() for r in caplog.records)
    assert second == {"id": 20}
    assert [e.status for e in form.ledger.entries] == [LinkStatus.LINKED]


def test_submit_is_guarded_while_busy():
    gate_holder = {}
    posts = []

    async def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=DEPARTMENTS if "departments" in request.url.path else [])
        posts.append(request.url.path)
        await gate_holder["gate"].wait()
        return httpx.Response(201, json={"id": 1})

    async def scenario():
        gate_holder["gate"] = asyncio.Event()
        form = ParentForm(THING_FORM, ApiClient(transport=httpx.MockTransport(handler)))
        await form.load()
        form.set_value("title", "Plano")
        form.slot("department").select(1)
        first = asyncio.create_task(form.submit())
        await asyncio.sleep(0.01)
        assert form.busy is True
        second = await form.submit()
        gate_holder["gate"].set()
        return await first, second

    first, second = asyncio.run(scenario())
    assert first == {"id": 1}
    assert second is None
    assert posts == ["/api/things"]


def test_closing_form_discards_late_results():
    async def handler(request: httpx.Request) -> httpx.Response:
        await gate_holder["gate"].wait()
        return httpx.Response(200, json=DEPARTMENTS)

    gate_holder = {}

    async def scenario():
        gate_holder["gate"] = asyncio.Event()
        form = ParentForm(THING_FORM, ApiClient(transport=httpx.MockTransport(handler)))
        task = asyncio.create_task(form.load())
        await asyncio.sleep(0.01)
        form.close()
        gate_holder["gate"].set()
        await task
        return form

    form = asyncio.run(scenario())
    assert form.ready is False
    assert form.slot("department").options == []
    assert form.slot("department").state is SlotState.IDLE
    assert form.slot("participants").state is SlotState.IDLE
    assert form.notifier.messages == []


def test_selection_copies_contact_fields_once():
    person = {"id": 2, "name": "Helena", "role": "Oficial Social", "contact": "h@x.org"}
    api = FakeApi({("GET", "/api/responsible-persons"): (200, [person])})

    async def scenario():
        form = ParentForm(WORKER_GRIEVANCE_FORM, api.client())
        await form.load()
        return form

    form = asyncio.run(scenario())
    form.slot("acknowledged_by").select(2)
    assert form.values["acknowledged_by_name"] == "Helena"
    assert form.values["acknowledged_by_position"] == "Oficial Social"

    form.set_value("acknowledged_by_position", "Coordenadora")
    assert person["role"] == "Oficial Social"
    assert form.values["acknowledged_by"]["role"] == "Oficial Social"
