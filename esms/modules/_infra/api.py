"""Read access to the audit trail."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict

from esms.utils.audit import fetch_last_audit_rows

from .repository import with_session

router = APIRouter(prefix="/api/audit-logs", tags=["audit"])


class AuditLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ts_iso: str
    entity: str
    entity_id: Optional[int] = None
    action: str
    field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None


@router.get("", response_model=list[AuditLogRead])
def list_audit_logs(limit: int = Query(default=50, ge=1, le=500)) -> list[AuditLogRead]:
    with with_session() as session:
        return [AuditLogRead.model_validate(row) for row in fetch_last_audit_rows(session, limit)]
