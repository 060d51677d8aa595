"""Record kind for the incident report register."""

from esms.modules._infra.crud import RecordKind
from esms.modules.reference import models as reference_models

from . import models, schemas

INCIDENT_REPORTS = RecordKind(
    resource="incident-reports",
    entity="incident_report",
    model=models.IncidentReport,
    create_schema=schemas.IncidentReportCreate,
    read_schema=schemas.IncidentReportRead,
    label_field="description",
    search_fields=("reporter_name", "location", "activity", "description"),
    order_by="date",
    descending=True,
    links={
        "department": reference_models.Department,
        "subproject": reference_models.Subproject,
        "person_involved": reference_models.PersonInvolved,
    },
    multi_links={
        "investigation_participants": reference_models.InvestigationParticipant,
        "immediate_actions": reference_models.ImmediateAction,
    },
    filter_fields=("department_id", "subproject_id", "incident_type"),
)
