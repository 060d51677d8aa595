"""Pydantic payloads for impact assessments."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import IsoDate, OptionalText, RequiredText, min_text
from esms.modules.reference.schemas import (
    DepartmentRead,
    EnvironmentalFactorRead,
    LegalRequirementRead,
    RiskAndImpactRead,
    SubprojectRead,
)

from .significance import (
    ClassificationState,
    Intensity,
    Probability,
    Significance,
    classification_state,
)


ActivityText = min_text(2)
MeasuresText = min_text(10)


class LifeCycle(str, Enum):
    PRE_CONSTRUCAO = "PRE_CONSTRUCAO"
    CONSTRUCAO = "CONSTRUCAO"
    OPERACAO = "OPERACAO"
    DESATIVACAO = "DESATIVACAO"
    ENCERRAMENTO = "ENCERRAMENTO"
    REINTEGRACAO_RESTAURACAO = "REINTEGRACAO_RESTAURACAO"


class Statute(str, Enum):
    POSITIVO = "POSITIVO"
    NEGATIVO = "NEGATIVO"


class Extension(str, Enum):
    LOCAL = "LOCAL"
    REGIONAL = "REGIONAL"
    NACIONAL = "NACIONAL"
    GLOBAL = "GLOBAL"


class Duration(str, Enum):
    CURTO_PRAZO = "CURTO_PRAZO"
    MEDIO_PRAZO = "MEDIO_PRAZO"
    LONGO_PRAZO = "LONGO_PRAZO"


class Effectiveness(str, Enum):
    EFFECTIVE = "EFFECTIVE"
    NOT_EFFECTIVE = "NOT_EFFECTIVE"


class ImpactAssessmentCreate(BaseModel):
    """Create/update payload. A ``significance`` sent by the client is ignored."""

    department: Optional[LinkRef] = None
    subproject: Optional[LinkRef] = None
    activity: ActivityText
    risks_and_impact: LinkRef
    environmental_factor: LinkRef
    life_cycle: LifeCycle
    statute: Statute
    extension: Extension
    duration: Duration
    intensity: Intensity
    probability: Probability
    description_of_measures: MeasuresText
    deadline: IsoDate
    responsible: OptionalText = None
    effectiveness_assessment: Effectiveness
    legal_requirements: list[LinkRef] = []
    compliance_requirements: RequiredText
    observations: OptionalText = None


class ImpactAssessmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    department_id: Optional[int] = None
    department: Optional[DepartmentRead] = None
    subproject_id: Optional[int] = None
    subproject: Optional[SubprojectRead] = None
    activity: str
    risks_and_impact: RiskAndImpactRead
    environmental_factor: EnvironmentalFactorRead
    life_cycle: LifeCycle
    statute: Statute
    extension: Extension
    duration: Duration
    intensity: Intensity
    probability: Probability
    significance: Significance
    description_of_measures: str
    deadline: str
    responsible: Optional[str] = None
    effectiveness_assessment: Effectiveness
    legal_requirements: list[LegalRequirementRead] = []
    compliance_requirements: str
    observations: Optional[str] = None

    @computed_field
    @property
    def significance_label(self) -> str:
        return self.significance.label

    @computed_field
    @property
    def significance_state(self) -> ClassificationState:
        return classification_state(self.intensity, self.probability)
