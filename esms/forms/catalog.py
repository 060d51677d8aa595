"""Form definitions for every register, built on the shared REST schemas."""

from __future__ import annotations

from esms.modules.communications.schemas import (
    COMPLAINT_VISIBILITY,
    GRIEVANCE_VISIBILITY,
    ComplaintCreate,
    WorkerGrievanceCreate,
)
from esms.modules.documents.schemas import DocumentCreate
from esms.modules.emergency.schemas import INCIDENT_VISIBILITY, IncidentReportCreate
from esms.modules.reference.kinds import REFERENCE_KINDS
from esms.modules.risks.schemas import ImpactAssessmentCreate
from esms.modules.risks.significance import classification_state, classify
from esms.modules.training.schemas import TRAINING_VISIBILITY, TrainingMatrixCreate
from esms.modules.waste.schemas import WasteManagementCreate, WasteTransferLogCreate

from .form import DerivedField, FormDefinition
from .resolver import EntityKind, SlotSpec

ENTITY_KINDS = {
    resource: EntityKind(
        resource=resource,
        label_field=kind.label_field,
        create_schema=kind.create_schema,
        noun=kind.noun.capitalize(),
    )
    for resource, kind in REFERENCE_KINDS.items()
}


def _kind(resource: str) -> EntityKind:
    return ENTITY_KINDS[resource]


SIGNIFICANCE = DerivedField(
    "significance",
    ("intensity", "probability"),
    lambda values: classify(values.get("intensity"), values.get("probability")).value,
)
SIGNIFICANCE_STATE = DerivedField(
    "significance_state",
    ("intensity", "probability"),
    lambda values: classification_state(values.get("intensity"), values.get("probability")).value,
)

IMPACT_ASSESSMENT_FORM = FormDefinition(
    resource="impact-assessments",
    create_schema=ImpactAssessmentCreate,
    noun="Impact assessment",
    slots=(
        SlotSpec("department", _kind("departments")),
        SlotSpec("subproject", _kind("subprojects")),
        SlotSpec("risks_and_impact", _kind("risks-and-impacts"), required=True),
        SlotSpec("environmental_factor", _kind("environmental-factors"), required=True),
        SlotSpec("legal_requirements", _kind("legal-requirements"), multi=True),
    ),
    derived=(SIGNIFICANCE, SIGNIFICANCE_STATE),
)

INCIDENT_REPORT_FORM = FormDefinition(
    resource="incident-reports",
    create_schema=IncidentReportCreate,
    noun="Incident report",
    slots=(
        SlotSpec("department", _kind("departments")),
        SlotSpec("subproject", _kind("subprojects")),
        SlotSpec("person_involved", _kind("persons-involved"), required=True),
        SlotSpec("investigation_participants", _kind("investigation-participants"), multi=True),
        SlotSpec("immediate_actions", _kind("immediate-actions"), multi=True),
    ),
    visibility=INCIDENT_VISIBILITY,
    file_fields=("photo_url",),
)

WORKER_GRIEVANCE_FORM = FormDefinition(
    resource="worker-grievances",
    create_schema=WorkerGrievanceCreate,
    noun="Grievance",
    slots=(
        SlotSpec(
            "acknowledged_by",
            _kind("responsible-persons"),
            copy_fields={"name": "acknowledged_by_name", "role": "acknowledged_by_position"},
        ),
    ),
    visibility=GRIEVANCE_VISIBILITY,
)

COMPLAINT_FORM = FormDefinition(
    resource="complaints",
    create_schema=ComplaintCreate,
    noun="Complaint",
    slots=(SlotSpec("department", _kind("departments")),),
    visibility=COMPLAINT_VISIBILITY,
)

DOCUMENT_FORM = FormDefinition(
    resource="documents",
    create_schema=DocumentCreate,
    noun="Document",
    slots=(SlotSpec("document_type", _kind("document-types"), required=True),),
    file_fields=("document_path",),
)

TRAINING_MATRIX_FORM = FormDefinition(
    resource="training-matrix",
    create_schema=TrainingMatrixCreate,
    noun="Training matrix entry",
    slots=(
        SlotSpec("position", _kind("positions"), required=True),
        SlotSpec("training", _kind("trainings"), required=True),
        SlotSpec("toolbox_talk", _kind("toolbox-talks"), required=True),
    ),
    visibility=TRAINING_VISIBILITY,
)

WASTE_TRANSFER_LOG_FORM = FormDefinition(
    resource="waste-transfer-log",
    create_schema=WasteTransferLogCreate,
    noun="Waste transfer log",
)

WASTE_MANAGEMENT_FORM = FormDefinition(
    resource="waste-management",
    create_schema=WasteManagementCreate,
    noun="Waste management record",
)

FORMS = {
    form.resource: form
    for form in (
        IMPACT_ASSESSMENT_FORM,
        INCIDENT_REPORT_FORM,
        WORKER_GRIEVANCE_FORM,
        COMPLAINT_FORM,
        DOCUMENT_FORM,
        TRAINING_MATRIX_FORM,
        WASTE_TRANSFER_LOG_FORM,
        WASTE_MANAGEMENT_FORM,
    )
}

# Columns searched by each register's list view.
LIST_SEARCH_FIELDS = {
    "impact-assessments": ("activity", "risks_and_impact", "environmental_factor", "significance"),
    "incident-reports": ("reporter_name", "location", "description", "incident_type"),
    "worker-grievances": ("name", "company", "grievance_details"),
    "complaints": ("number", "local_occurrence", "description", "claim_category"),
    "documents": ("code", "document_name", "document_type"),
    "training-matrix": ("position", "training", "approved_by"),
    "waste-transfer-log": ("waste_type", "reference_number", "transfer_company"),
    "waste-management": ("waste_route", "disposal_company", "transportation_company_method"),
}
