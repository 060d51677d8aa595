"""Payload references from parent records to reference entities."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from .errors import UnknownReferenceError


class LinkRef(BaseModel):
    """A linked entity as sent by a form: its id, plus any snapshot fields.

    Forms post the full entity object they hold; only ``id`` is used.
    """

    model_config = ConfigDict(extra="ignore")

    id: int


def resolve_one(session: Session, model: Any, ref: Optional[LinkRef], field: str) -> Any:
    if ref is None:
        return None
    obj = session.get(model, ref.id)
    if obj is None:
        raise UnknownReferenceError(f"Unknown {field} id {ref.id}")
    return obj


def resolve_many(session: Session, model: Any, refs: Iterable[LinkRef], field: str) -> list[Any]:
    seen: set[int] = set()
    resolved = []
    for ref in refs:
        if ref.id in seen:
            continue
        seen.add(ref.id)
        resolved.append(resolve_one(session, model, ref, field))
    return resolved
