"""Parent-record form controller."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from esms.modules._infra.visibility import VisibilityRule, hidden_fields

from .cancel import CancelToken, OperationCancelled
from .client import ApiClient, ApiError
from .notify import Notifier
from .resolver import LinkedEntitySlot, SlotSpec
from .validation import check

logger = logging.getLogger(__name__)

ORPHAN_WARNING = (
    "Some linked records were created but the form was not saved. "
    "They were kept and can be selected again."
)


class ReadOnlyFieldError(Exception):
    """Raised when a form tries to write a derived field."""


@dataclass(frozen=True)
class DerivedField:
    name: str
    depends_on: tuple
    compute: Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class FormDefinition:
    resource: str
    create_schema: type
    slots: Sequence[SlotSpec] = ()
    visibility: Sequence[VisibilityRule] = ()
    derived: Sequence[DerivedField] = ()
    file_fields: Sequence[str] = ()
    noun: str = "Record"

    @property
    def path(self) -> str:
        return f"/api/{self.resource}"


def _initial(info) -> Any:
    if info.is_required():
        return None
    default = info.get_default(call_default_factory=True)
    if isinstance(default, list):
        return list(default)
    return getattr(default, "value", default)


class LinkStatus(str, Enum):
    PENDING = "PENDING"
    LINKED = "LINKED"
    ORPHANED = "ORPHANED"


@dataclass
class LedgerEntry:
    resource: str
    field: str
    entity_id: int
    status: LinkStatus = LinkStatus.PENDING


class LinkLedger:
    """Tracks reference entities created inline until the parent is saved.

    There is no transaction spanning the child and the parent: a child whose
    parent save fails is marked orphaned, never deleted.
    """

    def __init__(self) -> None:
        self.entries: List[LedgerEntry] = []

    def record(self, resource: str, field: str, entity_id: int) -> LedgerEntry:
        entry = LedgerEntry(resource, field, entity_id)
        self.entries.append(entry)
        return entry

    def with_status(self, status: LinkStatus) -> List[LedgerEntry]:
        return [e for e in self.entries if e.status is status]

    @staticmethod
    def _referenced(payload: Mapping[str, Any], entry: LedgerEntry) -> bool:
        value = payload.get(entry.field)
        if isinstance(value, Mapping):
            return value.get("id") == entry.entity_id
        if isinstance(value, (list, tuple)):
            return any(isinstance(v, Mapping) and v.get("id") == entry.entity_id for v in value)
        return False

    def settle(self, payload: Mapping[str, Any]) -> None:
        """The parent was saved with ``payload``."""
        for entry in self.entries:
            if entry.status is LinkStatus.LINKED:
                continue
            if self._referenced(payload, entry):
                entry.status = LinkStatus.LINKED
            elif entry.status is LinkStatus.PENDING:
                self._orphan(entry, "not referenced by the saved record")

    def fail(self) -> List[LedgerEntry]:
        """The parent save failed; every pending child becomes an orphan."""
        orphaned = self.with_status(LinkStatus.PENDING)
        for entry in orphaned:
            self._orphan(entry, "parent save failed")
        return orphaned

    @staticmethod
    def _orphan(entry: LedgerEntry, reason: str) -> None:
        entry.status = LinkStatus.ORPHANED
        logger.error(
            "Orphaned %s %s created for field %s: %s",
            entry.resource,
            entry.entity_id,
            entry.field,
            reason,
        )


class ParentForm:
    """State and actions of one open create/edit form.

    ``record`` pre-fills the form for editing; the form then PUTs instead of
    POSTing. ``on_success`` (sync or async) runs after a successful save.
    """

    def __init__(
        self,
        definition: FormDefinition,
        client: ApiClient,
        notifier: Optional[Notifier] = None,
        *,
        record: Optional[Mapping[str, Any]] = None,
        on_success: Optional[Callable[[Dict[str, Any]], Any]] = None,
    ) -> None:
        self.definition = definition
        self.client = client
        self.notifier = notifier or Notifier()
        self.on_success = on_success
        self.token = CancelToken()
        self.ledger = LinkLedger()
        self.errors: Dict[str, str] = {}
        self.ready = False
        self.busy = False
        self.is_open = True
        self.uploading: set = set()
        self._derived = {d.name: d for d in definition.derived}

        fields = definition.create_schema.model_fields
        self.values: Dict[str, Any] = {name: _initial(info) for name, info in fields.items()}
        for spec in definition.slots:
            if spec.multi and self.values.get(spec.field) is None:
                self.values[spec.field] = []
        self.record_id: Optional[int] = None
        if record is not None:
            self.record_id = record.get("id")
            self.values.update({name: record.get(name) for name in fields if name in record})
        self.slots: Dict[str, LinkedEntitySlot] = {
            spec.field: LinkedEntitySlot(spec, self) for spec in definition.slots
        }
        self._apply_rules()

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    def slot(self, field: str) -> LinkedEntitySlot:
        return self.slots[field]

    async def load(self) -> None:
        """Load every slot's options concurrently; ``ready`` flips once all settle."""
        await asyncio.gather(*(slot.load() for slot in self.slots.values()))
        if self.token.cancelled:
            return
        self.ready = True

    def set_value(self, field: str, value: Any) -> None:
        if field in self._derived:
            raise ReadOnlyFieldError(f"{field} is computed and cannot be edited")
        self.values[field] = value
        self.errors.pop(field, None)
        self._apply_rules(field)

    def _apply_rules(self, changed: Optional[str] = None) -> None:
        for name in hidden_fields(self.definition.visibility, self.values):
            if self.values.get(name) is not None:
                self.values[name] = None
        for derived in self.definition.derived:
            if changed is None or changed in derived.depends_on:
                self.values[derived.name] = derived.compute(self.values)

    def is_visible(self, field: str) -> bool:
        return field not in hidden_fields(self.definition.visibility, self.values)

    def _input_values(self) -> Dict[str, Any]:
        return {k: v for k, v in self.values.items() if k not in self._derived}

    def validate(self) -> Dict[str, str]:
        """Check the form locally; no request is made."""
        errors: Dict[str, str] = {}
        for spec in self.definition.slots:
            if spec.required and not self.slots[spec.field].selected_ids():
                errors[spec.field] = "Please select a value"
        _, schema_errors = check(self.definition.create_schema, self._input_values())
        for name, message in schema_errors.items():
            errors.setdefault(name.split(".", 1)[0], message)
        self.errors = errors
        return errors

    def payload(self) -> Dict[str, Any]:
        model, _ = check(self.definition.create_schema, self._input_values())
        if model is None:
            raise ValueError("Form is not valid")
        return model.model_dump(mode="json")

    async def submit(self) -> Optional[Dict[str, Any]]:
        """Save the record; return the saved record or ``None``."""
        if self.busy or not self.is_open:
            return None
        if self.validate():
            return None
        payload = self.payload()
        self.busy = True
        try:
            if self.is_edit:
                request = self.client.put_json(f"{self.definition.path}/{self.record_id}", payload)
            else:
                request = self.client.post_json(self.definition.path, payload)
            saved = await self.token.guard(request)
        except OperationCancelled:
            return None
        except ApiError as exc:
            self.busy = False
            self.notifier.error(exc.message)
            if self.ledger.fail():
                self.notifier.error(ORPHAN_WARNING)
            return None

        self.busy = False
        self.ledger.settle(payload)
        self.record_id = saved.get("id", self.record_id) if isinstance(saved, dict) else self.record_id
        self.notifier.success(f"{self.definition.noun} saved")
        if self.on_success is not None:
            result = self.on_success(saved)
            if inspect.isawaitable(result):
                await result
        self.close()
        return saved

    async def attach_file(
        self, field: str, filename: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> Optional[str]:
        """Upload a file and store its URL in ``field``."""
        if field not in self.definition.file_fields:
            raise KeyError(f"{field} is not a file field")
        if field in self.uploading or not self.is_open:
            return None
        self.uploading.add(field)
        try:
            url = await self.token.guard(self.client.upload("/api/upload", filename, content, content_type))
        except OperationCancelled:
            return None
        except ApiError as exc:
            self.uploading.discard(field)
            self.errors[field] = exc.message
            self.notifier.error(exc.message)
            return None
        self.uploading.discard(field)
        self.set_value(field, url)
        return url

    def close(self) -> None:
        """Close the form; calls still in flight resolve without touching it."""
        self.is_open = False
        self.token.cancel()
        for slot in self.slots.values():
            if slot.dialog is not None:
                slot.dialog.cancel()
