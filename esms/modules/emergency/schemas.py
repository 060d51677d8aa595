"""Pydantic payloads for incident reports."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import (
    IsoDate,
    OptionalText,
    RequiredText,
    TimeOfDay,
    min_text,
)
from esms.modules._infra.visibility import VisibilityRule, blank_hidden
from esms.modules.reference.schemas import (
    DepartmentRead,
    ImmediateActionRead,
    InvestigationParticipantRead,
    PersonInvolvedRead,
    SubprojectRead,
)

DescriptionText = min_text(10)


class YesNo(str, Enum):
    YES = "YES"
    NO = "NO"


class IncidentType(str, Enum):
    HUMAN = "HUMAN"
    SAFETY = "SAFETY"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    ENVIRONMENTAL = "ENVIRONMENTAL"
    SOCIAL = "SOCIAL"
    OTHER = "OTHER"


class NatureAndExtent(str, Enum):
    MINOR_INTOXICATION = "MINOR_INTOXICATION"
    SEVERE_INTOXICATION = "SEVERE_INTOXICATION"
    MINOR_INJURY = "MINOR_INJURY"
    SEVERE_INJURY = "SEVERE_INJURY"
    DEATH = "DEATH"
    NONE = "NONE"
    OTHER = "OTHER"


INCIDENT_VISIBILITY = (
    VisibilityRule.when("other_incident_type", "incident_type", IncidentType.OTHER.value),
    VisibilityRule.when("contractor_name", "involves_contractor", YesNo.YES.value),
)


class IncidentReportCreate(BaseModel):
    reporter_name: RequiredText
    reporter_function: RequiredText
    department: Optional[LinkRef] = None
    subproject: Optional[LinkRef] = None
    date: IsoDate
    time: TimeOfDay
    location: RequiredText
    activity: RequiredText
    description: DescriptionText
    incident_type: IncidentType
    other_incident_type: OptionalText = None
    equipment: OptionalText = None
    observation: OptionalText = None
    previous_incident: YesNo = YesNo.NO
    risk_analysis_done: YesNo = YesNo.NO
    procedure_exists: YesNo = YesNo.NO
    worker_trained: YesNo = YesNo.NO
    involves_contractor: YesNo = YesNo.NO
    contractor_name: OptionalText = None
    nature_and_extent: NatureAndExtent
    possible_causes: OptionalText = None
    person_involved: LinkRef
    investigation_participants: list[LinkRef] = []
    immediate_actions: list[LinkRef] = []
    photo_url: OptionalText = None

    @model_validator(mode="after")
    def clear_hidden_fields(self) -> "IncidentReportCreate":
        return blank_hidden(self, INCIDENT_VISIBILITY)


class IncidentReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reporter_name: str
    reporter_function: str
    department_id: Optional[int] = None
    department: Optional[DepartmentRead] = None
    subproject_id: Optional[int] = None
    subproject: Optional[SubprojectRead] = None
    date: str
    time: str
    location: str
    activity: str
    description: str
    incident_type: IncidentType
    other_incident_type: Optional[str] = None
    equipment: Optional[str] = None
    observation: Optional[str] = None
    previous_incident: YesNo
    risk_analysis_done: YesNo
    procedure_exists: YesNo
    worker_trained: YesNo
    involves_contractor: YesNo
    contractor_name: Optional[str] = None
    nature_and_extent: NatureAndExtent
    possible_causes: Optional[str] = None
    person_involved: PersonInvolvedRead
    investigation_participants: list[InvestigationParticipantRead] = []
    immediate_actions: list[ImmediateActionRead] = []
    photo_url: Optional[str] = None
