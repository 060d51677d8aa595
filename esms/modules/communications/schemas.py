"""Pydantic payloads for worker grievances and complaints."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import (
    IsoDate,
    OptionalIsoDate,
    OptionalText,
    RequiredText,
    min_text,
)
from esms.modules._infra.visibility import VisibilityRule, blank_hidden
from esms.modules.reference.schemas import DepartmentRead, ResponsiblePersonRead
from esms.utils.timefmt import coerce_date

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DetailsText = min_text(10)


class YesNo(str, Enum):
    YES = "YES"
    NO = "NO"


class ContactMethod(str, Enum):
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    FACE_TO_FACE = "FACE_TO_FACE"


class Language(str, Enum):
    PORTUGUESE = "PORTUGUESE"
    ENGLISH = "ENGLISH"
    OTHER = "OTHER"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class ClaimCategory(str, Enum):
    ODOR = "ODOR"
    NOISE = "NOISE"
    EFFLUENTS = "EFFLUENTS"
    COMPANY_VEHICLES = "COMPANY_VEHICLES"
    MIGRANT_WORKERS = "MIGRANT_WORKERS"
    SECURITY_PERSONNEL = "SECURITY_PERSONNEL"
    GBV_SEA = "GBV_SEA"
    OTHER = "OTHER"


class ComplaintStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


GRIEVANCE_VISIBILITY = (
    VisibilityRule.when("other_language", "preferred_language", Language.OTHER.value),
)

COMPLAINT_VISIBILITY = (
    VisibilityRule.when("other_claim_category", "claim_category", ClaimCategory.OTHER.value),
)


class WorkerGrievanceCreate(BaseModel):
    name: RequiredText
    company: RequiredText
    date: IsoDate
    preferred_contact_method: ContactMethod
    contact: RequiredText
    preferred_language: Language
    other_language: OptionalText = None
    grievance_details: DetailsText
    acknowledged_by: Optional[LinkRef] = None
    acknowledgement_reference: OptionalText = None
    acknowledged_by_name: OptionalText = None
    acknowledged_by_position: OptionalText = None
    acknowledgement_date: OptionalIsoDate = None
    acknowledgement_signature: OptionalText = None
    follow_up_details: OptionalText = None
    closed_out_date: OptionalIsoDate = None
    response_signature: OptionalText = None
    response_receipt_acknowledged: OptionalText = None
    response_acknowledged_by_name: OptionalText = None
    response_acknowledged_by_signature: OptionalText = None
    response_acknowledgement_date: OptionalIsoDate = None

    @model_validator(mode="after")
    def clear_hidden_fields(self) -> "WorkerGrievanceCreate":
        return blank_hidden(self, GRIEVANCE_VISIBILITY)


class WorkerGrievanceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    company: str
    date: str
    preferred_contact_method: ContactMethod
    contact: str
    preferred_language: Language
    other_language: Optional[str] = None
    grievance_details: str
    acknowledged_by_id: Optional[int] = None
    acknowledged_by: Optional[ResponsiblePersonRead] = None
    acknowledgement_reference: Optional[str] = None
    acknowledged_by_name: Optional[str] = None
    acknowledged_by_position: Optional[str] = None
    acknowledgement_date: Optional[str] = None
    acknowledgement_signature: Optional[str] = None
    follow_up_details: Optional[str] = None
    closed_out_date: Optional[str] = None
    response_signature: Optional[str] = None
    response_receipt_acknowledged: Optional[str] = None
    response_acknowledged_by_name: Optional[str] = None
    response_acknowledged_by_signature: Optional[str] = None
    response_acknowledgement_date: Optional[str] = None


class ComplaintCreate(BaseModel):
    number: RequiredText
    date_occurred: IsoDate
    local_occurrence: RequiredText
    description: RequiredText
    who_involved: OptionalText = None
    registered_date: OptionalIsoDate = None
    complainant_gender: Gender
    complainant_age: Optional[int] = Field(default=None, ge=0, le=120)
    anonymous_complaint: YesNo
    telephone: RequiredText
    email: OptionalText = None
    complainant_address: OptionalText = None
    claim_category: ClaimCategory
    other_claim_category: OptionalText = None
    department: Optional[LinkRef] = None
    status: ComplaintStatus = ComplaintStatus.PENDING
    action_taken: OptionalText = None
    closing_date: OptionalIsoDate = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        if value and not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value

    @model_validator(mode="after")
    def check_dates(self) -> "ComplaintCreate":
        if self.closing_date and self.closing_date < self.date_occurred:
            raise ValueError("closing_date cannot be before date_occurred")
        return blank_hidden(self, COMPLAINT_VISIBILITY)


class ComplaintRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str
    date_occurred: str
    local_occurrence: str
    description: str
    who_involved: Optional[str] = None
    registered_date: Optional[str] = None
    complainant_gender: Gender
    complainant_age: Optional[int] = None
    anonymous_complaint: YesNo
    telephone: str
    email: Optional[str] = None
    complainant_address: Optional[str] = None
    claim_category: ClaimCategory
    other_claim_category: Optional[str] = None
    department_id: Optional[int] = None
    department: Optional[DepartmentRead] = None
    status: ComplaintStatus
    action_taken: Optional[str] = None
    closing_date: Optional[str] = None

    @computed_field
    @property
    def days_to_closure(self) -> Optional[int]:
        if not self.closing_date:
            return None
        return (coerce_date(self.closing_date) - coerce_date(self.date_occurred)).days
