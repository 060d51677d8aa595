"""Impact assessment register tables."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin
from esms.modules.reference.models import (
    Department,
    EnvironmentalFactor,
    LegalRequirement,
    RiskAndImpact,
    Subproject,
)

impact_assessment_legal_requirements = Table(
    "impact_assessment_legal_requirements",
    Base.metadata,
    Column("impact_assessment_id", Integer, ForeignKey("impact_assessments.id", ondelete="CASCADE"), primary_key=True),
    Column("legal_requirement_id", Integer, ForeignKey("legal_requirements.id"), primary_key=True),
)


class ImpactAssessment(TimestampMixin, Base):
    __tablename__ = "impact_assessments"

    id = Column(Integer, primary_key=True)
    department_id = Column(Integer, ForeignKey("departments.id"), index=True)
    subproject_id = Column(Integer, ForeignKey("subprojects.id"), index=True)
    activity = Column(String, nullable=False)
    risks_and_impact_id = Column(Integer, ForeignKey("risks_and_impacts.id"), nullable=False)
    environmental_factor_id = Column(Integer, ForeignKey("environmental_factors.id"), nullable=False)
    life_cycle = Column(String, nullable=False)
    statute = Column(String, nullable=False)
    extension = Column(String, nullable=False)
    duration = Column(String, nullable=False)
    intensity = Column(String, nullable=False)
    probability = Column(String, nullable=False)
    significance = Column(String, nullable=False, default="NONE")
    description_of_measures = Column(Text, nullable=False)
    deadline = Column(String, nullable=False)
    responsible = Column(String)
    effectiveness_assessment = Column(String, nullable=False)
    compliance_requirements = Column(Text, nullable=False)
    observations = Column(Text)

    department = relationship(Department)
    subproject = relationship(Subproject)
    risks_and_impact = relationship(RiskAndImpact)
    environmental_factor = relationship(EnvironmentalFactor)
    legal_requirements = relationship(
        LegalRequirement,
        secondary=impact_assessment_legal_requirements,
        order_by=LegalRequirement.id,
    )
