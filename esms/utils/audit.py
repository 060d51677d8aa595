from __future__ import annotations

import json
from typing import Any, Mapping

from sqlalchemy.orm import Session

from esms.modules._infra.models import AuditLog
from esms.utils.timefmt import now_utc_iso


def _serialize(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def write_audit(
    session: Session,
    *,
    entity: str,
    entity_id: int | None,
    action: str,
    field: str | None = None,
    old_value: Any = None,
    new_value: Any = None,
) -> None:
    session.add(
        AuditLog(
            ts_iso=now_utc_iso(),
            entity=entity,
            entity_id=entity_id,
            action=action,
            field=field,
            old_value=_serialize(old_value),
            new_value=_serialize(new_value),
        )
    )


def audit_changes(
    session: Session,
    *,
    entity: str,
    entity_id: int,
    before: Mapping[str, Any],
    after: Mapping[str, Any],
) -> int:
    """Write one ``update`` row per changed field and return how many changed."""
    changed = 0
    for key, new_val in after.items():
        old_val = before.get(key)
        if old_val != new_val:
            write_audit(
                session,
                entity=entity,
                entity_id=entity_id,
                action="update",
                field=key,
                old_value=old_val,
                new_value=new_val,
            )
            changed += 1
    return changed


def fetch_last_audit_rows(session: Session, limit: int = 10) -> list[AuditLog]:
    return (
        session.query(AuditLog)
        .order_by(AuditLog.id.desc())
        .limit(limit)
        .all()
    )


__all__ = ["write_audit", "audit_changes", "fetch_last_audit_rows"]
