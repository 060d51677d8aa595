"""Linked-entity slots: pick a reference entity for a parent form, or create one inline.

A slot lists the entities of one reference kind, writes the chosen entity
(the whole object, not just its id) into a field of the parent form, and can
open a :class:`CreateDialog` for a new entity. The dialog only reports back
through its ``on_created`` callback; it never touches the parent form.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from .cancel import CancelToken, OperationCancelled
from .client import ApiClient, ApiError
from .notify import Notifier
from .validation import check

if TYPE_CHECKING:
    from .form import ParentForm

logger = logging.getLogger(__name__)


class SlotState(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    CREATING = "CREATING"


@dataclass(frozen=True)
class EntityKind:
    """A reference resource as seen by the forms."""

    resource: str
    label_field: str
    create_schema: type
    noun: str = ""

    @property
    def path(self) -> str:
        return f"/api/{self.resource}"

    def label(self, entity: Mapping[str, Any]) -> str:
        return str(entity.get(self.label_field) or "")


@dataclass(frozen=True)
class SlotSpec:
    field: str
    kind: EntityKind
    multi: bool = False
    required: bool = False
    # entity key -> parent form field, copied once on selection
    copy_fields: Mapping[str, str] = field(default_factory=dict)


class CreateDialog:
    """Inline creation of one reference entity."""

    def __init__(
        self,
        kind: EntityKind,
        client: ApiClient,
        notifier: Notifier,
        on_created: Callable[[Dict[str, Any]], None],
        token: Optional[CancelToken] = None,
    ) -> None:
        self.kind = kind
        self._client = client
        self._notifier = notifier
        self._on_created = on_created
        self._token = token or CancelToken()
        self.is_open = True
        self.busy = False
        self.errors: Dict[str, str] = {}

    async def submit(self, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Validate and POST ``data``; return the created entity or ``None``."""
        if self.busy or not self.is_open:
            return None
        model, errors = check(self.kind.create_schema, data)
        self.errors = errors
        if model is None:
            return None
        self.busy = True
        try:
            created = await self._token.guard(
                self._client.post_json(self.kind.path, model.model_dump(mode="json"))
            )
        except OperationCancelled:
            return None
        except ApiError as exc:
            self.busy = False
            self._notifier.error(exc.message)
            return None
        self.busy = False
        self.is_open = False
        self._notifier.success(f"{self.kind.noun or 'Record'} created")
        self._on_created(created)
        return created

    def cancel(self) -> None:
        self.is_open = False


class LinkedEntitySlot:
    def __init__(self, spec: SlotSpec, form: "ParentForm") -> None:
        self.spec = spec
        self._form = form
        self.options: List[Dict[str, Any]] = []
        self.state = SlotState.IDLE
        self.loaded = False
        self.dialog: Optional[CreateDialog] = None

    @property
    def field(self) -> str:
        return self.spec.field

    @property
    def kind(self) -> EntityKind:
        return self.spec.kind

    async def load(self) -> None:
        """Fetch the option list. Failures leave it empty and notify."""
        form = self._form
        self.state = SlotState.LOADING
        try:
            rows = await form.token.guard(form.client.get_json(self.kind.path))
        except OperationCancelled:
            self.state = SlotState.IDLE
            return
        except ApiError as exc:
            self.options = []
            form.notifier.error(exc.message)
        else:
            self.options = list(rows or [])
        self.state = SlotState.IDLE
        self.loaded = True

    def labels(self) -> List[tuple]:
        return [(entity["id"], self.kind.label(entity)) for entity in self.options]

    def find(self, entity_id: int) -> Dict[str, Any]:
        for entity in self.options:
            if entity.get("id") == entity_id:
                return entity
        raise KeyError(f"No {self.kind.resource} option with id {entity_id}")

    def selected(self) -> Any:
        return self._form.values.get(self.field)

    def selected_ids(self) -> List[int]:
        value = self.selected()
        if value is None:
            return []
        if self.spec.multi:
            return [item["id"] for item in value]
        return [value["id"]]

    def select(self, entity_id: Optional[int]) -> None:
        if self.spec.multi:
            raise TypeError(f"{self.field} holds several entities; use toggle()")
        if entity_id is None:
            self._form.set_value(self.field, None)
            return
        entity = dict(self.find(entity_id))
        self._form.set_value(self.field, entity)
        for entity_key, form_field in self.spec.copy_fields.items():
            self._form.set_value(form_field, entity.get(entity_key))

    def toggle(self, entity_id: int) -> None:
        if not self.spec.multi:
            raise TypeError(f"{self.field} holds one entity; use select()")
        current = list(self.selected() or [])
        kept = [item for item in current if item["id"] != entity_id]
        if len(kept) == len(current):
            kept.append(dict(self.find(entity_id)))
        self._form.set_value(self.field, kept)

    def begin_create(self) -> CreateDialog:
        form = self._form
        self.state = SlotState.CREATING
        self.dialog = CreateDialog(
            self.kind, form.client, form.notifier, self._on_created, form.token
        )
        return self.dialog

    def cancel_create(self) -> None:
        if self.dialog is not None:
            self.dialog.cancel()
        self.dialog = None
        self.state = SlotState.IDLE

    def _on_created(self, entity: Dict[str, Any]) -> None:
        self.options.append(entity)
        if self.spec.multi:
            if entity["id"] not in self.selected_ids():
                self.toggle(entity["id"])
        else:
            self.select(entity["id"])
        self._form.ledger.record(self.kind.resource, self.field, entity["id"])
        self.dialog = None
        self.state = SlotState.IDLE
