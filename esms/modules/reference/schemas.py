"""Pydantic payloads for the reference entities."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import (
    IsoDate,
    OptionalIsoDate,
    OptionalText,
    RequiredText,
)


class LegalRequirementStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"


class _Read(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int


class DepartmentCreate(BaseModel):
    name: RequiredText
    description: RequiredText


class DepartmentRead(_Read):
    name: str
    description: str


class SubprojectCreate(BaseModel):
    name: RequiredText
    location: RequiredText
    type: RequiredText
    approximate_area: float = Field(gt=0)
    contract_reference: OptionalText = None
    contractor_name: OptionalText = None
    estimated_cost: Optional[float] = Field(default=None, ge=0)


class SubprojectRead(_Read):
    name: str
    location: str
    type: str
    approximate_area: float
    contract_reference: Optional[str] = None
    contractor_name: Optional[str] = None
    estimated_cost: Optional[float] = None


class DocumentTypeCreate(BaseModel):
    description: RequiredText


class DocumentTypeRead(_Read):
    description: str


class RiskAndImpactCreate(BaseModel):
    description: RequiredText


class RiskAndImpactRead(_Read):
    description: str


class EnvironmentalFactorCreate(BaseModel):
    description: RequiredText


class EnvironmentalFactorRead(_Read):
    description: str


class LegalRequirementCreate(BaseModel):
    number: RequiredText
    document_title: RequiredText
    effective_date: OptionalIsoDate = None
    description: OptionalText = None
    status: LegalRequirementStatus = LegalRequirementStatus.ACTIVE
    law_file: OptionalText = None


class LegalRequirementRead(_Read):
    number: str
    document_title: str
    effective_date: Optional[str] = None
    description: Optional[str] = None
    status: LegalRequirementStatus
    law_file: Optional[str] = None


class NamedCreate(BaseModel):
    name: RequiredText


class NamedRead(_Read):
    name: str


class ResponsiblePersonCreate(BaseModel):
    name: RequiredText
    role: RequiredText
    contact: RequiredText
    date: IsoDate
    signature: OptionalText = None


class ResponsiblePersonRead(_Read):
    name: str
    role: str
    contact: str
    date: str
    signature: Optional[str] = None


class PersonInvolvedCreate(BaseModel):
    name: RequiredText
    department: LinkRef
    other_information: RequiredText


class PersonInvolvedRead(_Read):
    name: str
    department_id: int
    department: Optional[DepartmentRead] = None
    other_information: str


class InvestigationParticipantCreate(BaseModel):
    name: RequiredText
    company: RequiredText
    activity: RequiredText
    signature: RequiredText
    date: IsoDate


class InvestigationParticipantRead(_Read):
    name: str
    company: str
    activity: str
    signature: str
    date: str


class ImmediateActionCreate(BaseModel):
    action: RequiredText
    description: RequiredText
    responsible: RequiredText
    date: IsoDate
    signature: RequiredText


class ImmediateActionRead(_Read):
    action: str
    description: str
    responsible: str
    date: str
    signature: str
