"""Record kinds for every reference entity, keyed by REST resource name."""

from esms.modules._infra.crud import RecordKind

from . import models, schemas


def _reference(resource, entity, model, create_schema, read_schema, label_field, search_fields=None, **extra):
    return RecordKind(
        resource=resource,
        entity=entity,
        model=model,
        create_schema=create_schema,
        read_schema=read_schema,
        label_field=label_field,
        search_fields=tuple(search_fields or (label_field,)),
        order_by=label_field,
        guard_references=True,
        **extra,
    )


DEPARTMENTS = _reference(
    "departments",
    "department",
    models.Department,
    schemas.DepartmentCreate,
    schemas.DepartmentRead,
    "name",
    ("name", "description"),
)
SUBPROJECTS = _reference(
    "subprojects",
    "subproject",
    models.Subproject,
    schemas.SubprojectCreate,
    schemas.SubprojectRead,
    "name",
    ("name", "location", "type", "contractor_name"),
)
DOCUMENT_TYPES = _reference(
    "document-types",
    "document_type",
    models.DocumentType,
    schemas.DocumentTypeCreate,
    schemas.DocumentTypeRead,
    "description",
)
RISKS_AND_IMPACTS = _reference(
    "risks-and-impacts",
    "risk_and_impact",
    models.RiskAndImpact,
    schemas.RiskAndImpactCreate,
    schemas.RiskAndImpactRead,
    "description",
)
ENVIRONMENTAL_FACTORS = _reference(
    "environmental-factors",
    "environmental_factor",
    models.EnvironmentalFactor,
    schemas.EnvironmentalFactorCreate,
    schemas.EnvironmentalFactorRead,
    "description",
)
LEGAL_REQUIREMENTS = _reference(
    "legal-requirements",
    "legal_requirement",
    models.LegalRequirement,
    schemas.LegalRequirementCreate,
    schemas.LegalRequirementRead,
    "document_title",
    ("number", "document_title", "description"),
    filter_fields=("status",),
)
POSITIONS = _reference(
    "positions", "position", models.Position, schemas.NamedCreate, schemas.NamedRead, "name"
)
TRAININGS = _reference(
    "trainings", "training", models.Training, schemas.NamedCreate, schemas.NamedRead, "name"
)
TOOLBOX_TALKS = _reference(
    "toolbox-talks", "toolbox_talk", models.ToolboxTalk, schemas.NamedCreate, schemas.NamedRead, "name"
)
RESPONSIBLE_PERSONS = _reference(
    "responsible-persons",
    "responsible_person",
    models.ResponsiblePerson,
    schemas.ResponsiblePersonCreate,
    schemas.ResponsiblePersonRead,
    "name",
    ("name", "role", "contact"),
)
PERSONS_INVOLVED = _reference(
    "persons-involved",
    "person_involved",
    models.PersonInvolved,
    schemas.PersonInvolvedCreate,
    schemas.PersonInvolvedRead,
    "name",
    links={"department": models.Department},
    filter_fields=("department_id",),
)
INVESTIGATION_PARTICIPANTS = _reference(
    "investigation-participants",
    "investigation_participant",
    models.InvestigationParticipant,
    schemas.InvestigationParticipantCreate,
    schemas.InvestigationParticipantRead,
    "name",
    ("name", "company", "activity"),
)
IMMEDIATE_ACTIONS = _reference(
    "immediate-actions",
    "immediate_action",
    models.ImmediateAction,
    schemas.ImmediateActionCreate,
    schemas.ImmediateActionRead,
    "action",
    ("action", "description", "responsible"),
)

REFERENCE_KINDS = {
    kind.resource: kind
    for kind in (
        DEPARTMENTS,
        SUBPROJECTS,
        DOCUMENT_TYPES,
        RISKS_AND_IMPACTS,
        ENVIRONMENTAL_FACTORS,
        LEGAL_REQUIREMENTS,
        POSITIONS,
        TRAININGS,
        TOOLBOX_TALKS,
        RESPONSIBLE_PERSONS,
        PERSONS_INVOLVED,
        INVESTIGATION_PARTICIPANTS,
        IMMEDIATE_ACTIONS,
    )
}
