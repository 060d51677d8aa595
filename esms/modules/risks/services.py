"""Business rules for the impact assessment register."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Mapping, Optional

from esms.modules._infra.crud import RecordKind, list_records
from esms.modules.reference import models as reference_models

from . import models, schemas
from .significance import Significance, classify

logger = logging.getLogger(__name__)


def prepare_assessment(data: dict, obj=None) -> dict:
    """Derive ``significance`` from intensity and probability."""
    data["significance"] = classify(data.get("intensity"), data.get("probability")).value
    return data


IMPACT_ASSESSMENTS = RecordKind(
    resource="impact-assessments",
    entity="impact_assessment",
    model=models.ImpactAssessment,
    create_schema=schemas.ImpactAssessmentCreate,
    read_schema=schemas.ImpactAssessmentRead,
    label_field="activity",
    search_fields=("activity", "responsible", "compliance_requirements", "observations"),
    order_by="created_at",
    descending=True,
    links={
        "department": reference_models.Department,
        "subproject": reference_models.Subproject,
        "risks_and_impact": reference_models.RiskAndImpact,
        "environmental_factor": reference_models.EnvironmentalFactor,
    },
    multi_links={"legal_requirements": reference_models.LegalRequirement},
    filter_fields=("department_id", "subproject_id", "significance"),
    prepare=prepare_assessment,
)


def list_assessments(q: Optional[str] = None, filters: Optional[Mapping[str, str]] = None):
    return list_records(IMPACT_ASSESSMENTS, q=q, filters=filters)


def significance_summary(filters: Optional[Mapping[str, str]] = None) -> dict:
    """Count assessments per significance rating, highest rating first."""
    counts = Counter(row.significance for row in list_assessments(filters=filters))
    ordered = sorted(Significance, key=lambda item: item.severity, reverse=True)
    return {item.value: counts.get(item, 0) for item in ordered}
