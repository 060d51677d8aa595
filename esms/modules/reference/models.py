"""SQLAlchemy tables for the lookup entities parent records link to."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin


class Department(TimestampMixin, Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)


class Subproject(TimestampMixin, Base):
    __tablename__ = "subprojects"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    type = Column(String, nullable=False)
    approximate_area = Column(Float, nullable=False)
    contract_reference = Column(String)
    contractor_name = Column(String)
    estimated_cost = Column(Float)


class DocumentType(TimestampMixin, Base):
    __tablename__ = "document_types"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False, index=True)


class RiskAndImpact(TimestampMixin, Base):
    __tablename__ = "risks_and_impacts"

    id = Column(Integer, primary_key=True)
    description = Column(Text, nullable=False)


class EnvironmentalFactor(TimestampMixin, Base):
    __tablename__ = "environmental_factors"

    id = Column(Integer, primary_key=True)
    description = Column(Text, nullable=False)


class LegalRequirement(TimestampMixin, Base):
    __tablename__ = "legal_requirements"

    id = Column(Integer, primary_key=True)
    number = Column(String, nullable=False, index=True)
    document_title = Column(String, nullable=False)
    effective_date = Column(String)
    description = Column(Text)
    status = Column(String, nullable=False, default="ACTIVE")
    law_file = Column(String)


class Position(TimestampMixin, Base):
    __tablename__ = "positions"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)


class Training(TimestampMixin, Base):
    __tablename__ = "trainings"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)


class ToolboxTalk(TimestampMixin, Base):
    __tablename__ = "toolbox_talks"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)


class ResponsiblePerson(TimestampMixin, Base):
    __tablename__ = "responsible_persons"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    date = Column(String, nullable=False)
    signature = Column(String)


class PersonInvolved(TimestampMixin, Base):
    __tablename__ = "persons_involved"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False)
    other_information = Column(Text, nullable=False)

    department = relationship("Department")


class InvestigationParticipant(TimestampMixin, Base):
    __tablename__ = "investigation_participants"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    company = Column(String, nullable=False)
    activity = Column(String, nullable=False)
    signature = Column(String, nullable=False)
    date = Column(String, nullable=False)


class ImmediateAction(TimestampMixin, Base):
    __tablename__ = "immediate_actions"

    id = Column(Integer, primary_key=True)
    action = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)
    responsible = Column(String, nullable=False)
    date = Column(String, nullable=False)
    signature = Column(String, nullable=False)
