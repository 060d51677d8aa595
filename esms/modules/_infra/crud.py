"""Generic list/get/create/update/delete services and routes.

Each register declares a :class:`RecordKind`; the service functions and
:func:`add_crud_routes` do the rest. This module deliberately avoids
``from __future__ import annotations`` because FastAPI must see the concrete
schema classes bound in :func:`add_crud_routes`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from fastapi import APIRouter, Query, Request, Response, status
from pydantic import BaseModel
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from esms.utils.audit import audit_changes, write_audit

from .base import Base
from .errors import ESMSError, NotFoundError, ReferenceInUseError
from .links import resolve_many, resolve_one
from .repository import with_session

logger = logging.getLogger(__name__)

_SKIP_AUDIT_COLUMNS = {"id", "created_at", "updated_at"}


@dataclass
class RecordKind:
    resource: str
    entity: str
    model: Any
    create_schema: type
    read_schema: type
    label_field: str
    search_fields: tuple = ()
    order_by: str = "id"
    descending: bool = False
    links: Mapping[str, Any] = field(default_factory=dict)
    multi_links: Mapping[str, Any] = field(default_factory=dict)
    filter_fields: tuple = ()
    guard_references: bool = False
    prepare: Optional[Callable[[dict, Any], dict]] = None

    @property
    def noun(self) -> str:
        return self.entity.replace("_", " ")


def _snapshot(kind: RecordKind, obj: Any) -> dict:
    data = {
        column.name: getattr(obj, column.name)
        for column in obj.__table__.columns
        if column.name not in _SKIP_AUDIT_COLUMNS
    }
    for name in kind.multi_links:
        data[name] = [item.id for item in getattr(obj, name)]
    return data


def _apply_payload(session: Session, kind: RecordKind, obj: Any, payload: BaseModel) -> None:
    link_names = set(kind.links) | set(kind.multi_links)
    data = payload.model_dump(mode="json", exclude=link_names)
    if kind.prepare is not None:
        data = kind.prepare(data, obj)
    for key, value in data.items():
        if hasattr(kind.model, key):
            setattr(obj, key, value)
    for name, target in kind.links.items():
        setattr(obj, name, resolve_one(session, target, getattr(payload, name), name))
    for name, target in kind.multi_links.items():
        setattr(obj, name, resolve_many(session, target, getattr(payload, name) or [], name))


def _load(session: Session, kind: RecordKind, record_id: int) -> Any:
    obj = session.get(kind.model, record_id)
    if obj is None:
        raise NotFoundError(f"{kind.noun.capitalize()} not found")
    return obj


def count_references(session: Session, kind: RecordKind, record_id: int) -> int:
    """Count rows in any table holding a foreign key to ``record_id``."""
    target = kind.model.__table__
    total = 0
    for table in Base.metadata.sorted_tables:
        for fk in table.foreign_keys:
            if fk.column.table is target:
                stmt = select(func.count()).select_from(table).where(fk.parent == record_id)
                total += session.execute(stmt).scalar_one()
    return total


def _coerce_filter(name: str, value: str) -> Any:
    if name.endswith("_id"):
        try:
            return int(value)
        except ValueError:
            raise ESMSError(f"Invalid {name}: {value!r}")
    return value


def list_records(kind: RecordKind, q: Optional[str] = None, filters: Optional[Mapping[str, str]] = None) -> list:
    with with_session() as session:
        query = session.query(kind.model)
        for name, value in (filters or {}).items():
            query = query.filter(getattr(kind.model, name) == _coerce_filter(name, value))
        if q and q.strip() and kind.search_fields:
            pattern = f"%{q.strip()}%"
            query = query.filter(
                or_(*[getattr(kind.model, name).ilike(pattern) for name in kind.search_fields])
            )
        column = getattr(kind.model, kind.order_by)
        if kind.descending:
            query = query.order_by(column.desc(), kind.model.id.desc())
        else:
            query = query.order_by(column.asc(), kind.model.id.asc())
        return [kind.read_schema.model_validate(row) for row in query.all()]


def get_record(kind: RecordKind, record_id: int):
    with with_session() as session:
        return kind.read_schema.model_validate(_load(session, kind, record_id))


def create_record(kind: RecordKind, payload: BaseModel):
    with with_session() as session:
        obj = kind.model()
        _apply_payload(session, kind, obj, payload)
        session.add(obj)
        session.flush()
        write_audit(
            session,
            entity=kind.entity,
            entity_id=obj.id,
            action="create",
            new_value=_snapshot(kind, obj),
        )
        logger.info("Created %s %s", kind.noun, obj.id)
        return kind.read_schema.model_validate(obj)


def update_record(kind: RecordKind, record_id: int, payload: BaseModel):
    with with_session() as session:
        obj = _load(session, kind, record_id)
        before = _snapshot(kind, obj)
        _apply_payload(session, kind, obj, payload)
        session.flush()
        changed = audit_changes(
            session,
            entity=kind.entity,
            entity_id=obj.id,
            before=before,
            after=_snapshot(kind, obj),
        )
        logger.info("Updated %s %s (%d field(s) changed)", kind.noun, obj.id, changed)
        return kind.read_schema.model_validate(obj)


def delete_record(kind: RecordKind, record_id: int) -> None:
    with with_session() as session:
        obj = _load(session, kind, record_id)
        if kind.guard_references:
            usages = count_references(session, kind, record_id)
            if usages:
                logger.warning(
                    "Refused to delete %s %s: referenced by %d record(s)",
                    kind.noun,
                    record_id,
                    usages,
                )
                raise ReferenceInUseError(
                    f"Cannot delete {kind.noun} that is in use by {usages} record(s)",
                    usages,
                )
        before = _snapshot(kind, obj)
        session.delete(obj)
        write_audit(
            session,
            entity=kind.entity,
            entity_id=record_id,
            action="delete",
            old_value=before,
        )
        logger.info("Deleted %s %s", kind.noun, record_id)


def add_crud_routes(router: APIRouter, kind: RecordKind) -> APIRouter:
    """Attach the standard REST routes for ``kind`` to ``router``.

    Register any custom routes on ``router`` before calling this.
    """
    create_schema = kind.create_schema
    read_schema = kind.read_schema

    @router.get("", response_model=list[read_schema])
    def list_endpoint(request: Request, q: Optional[str] = Query(default=None)):
        filters = {
            name: value
            for name, value in request.query_params.items()
            if name in kind.filter_fields and value != ""
        }
        return list_records(kind, q=q, filters=filters)

    @router.get("/{record_id:int}", response_model=read_schema)
    def get_endpoint(record_id: int):
        return get_record(kind, record_id)

    @router.post("", response_model=read_schema, status_code=status.HTTP_201_CREATED)
    def create_endpoint(payload: create_schema):
        return create_record(kind, payload)

    @router.put("/{record_id:int}", response_model=read_schema)
    def update_endpoint(record_id: int, payload: create_schema):
        return update_record(kind, record_id, payload)

    @router.delete("/{record_id:int}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_endpoint(record_id: int) -> Response:
        delete_record(kind, record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("", status_code=status.HTTP_204_NO_CONTENT)
    def delete_by_query(id: int = Query(...)) -> Response:
        delete_record(kind, id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
