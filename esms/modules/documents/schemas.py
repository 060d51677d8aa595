"""Pydantic payloads for the document registry."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import IsoDate, OptionalText, RequiredText
from esms.modules.reference.schemas import DocumentTypeRead


class DocumentState(str, Enum):
    REVISION = "REVISION"
    INUSE = "INUSE"
    OBSOLETE = "OBSOLETE"


class DocumentCreate(BaseModel):
    code: RequiredText
    creation_date: IsoDate
    revision_date: IsoDate
    document_name: RequiredText
    document_type: LinkRef
    document_path: RequiredText
    document_state: DocumentState
    retention_period: RequiredText
    disposal_method: RequiredText
    observation: OptionalText = None

    @model_validator(mode="after")
    def check_revision_order(self) -> "DocumentCreate":
        if self.revision_date < self.creation_date:
            raise ValueError("revision_date cannot be before creation_date")
        return self


class DocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    creation_date: str
    revision_date: str
    document_name: str
    document_type_id: int
    document_type: DocumentTypeRead
    document_path: str
    document_state: DocumentState
    retention_period: str
    disposal_method: str
    observation: Optional[str] = None


class UploadResult(BaseModel):
    file_url: str
