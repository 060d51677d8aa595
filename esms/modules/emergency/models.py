"""Incident report tables."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin
from esms.modules.reference.models import (
    Department,
    ImmediateAction,
    InvestigationParticipant,
    PersonInvolved,
    Subproject,
)

incident_report_participants = Table(
    "incident_report_participants",
    Base.metadata,
    Column("incident_report_id", Integer, ForeignKey("incident_reports.id", ondelete="CASCADE"), primary_key=True),
    Column("participant_id", Integer, ForeignKey("investigation_participants.id"), primary_key=True),
)

incident_report_actions = Table(
    "incident_report_actions",
    Base.metadata,
    Column("incident_report_id", Integer, ForeignKey("incident_reports.id", ondelete="CASCADE"), primary_key=True),
    Column("immediate_action_id", Integer, ForeignKey("immediate_actions.id"), primary_key=True),
)


class IncidentReport(TimestampMixin, Base):
    __tablename__ = "incident_reports"

    id = Column(Integer, primary_key=True)
    reporter_name = Column(String, nullable=False)
    reporter_function = Column(String, nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id"), index=True)
    subproject_id = Column(Integer, ForeignKey("subprojects.id"), index=True)
    date = Column(String, nullable=False, index=True)
    time = Column(String, nullable=False)
    location = Column(String, nullable=False)
    activity = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    incident_type = Column(String, nullable=False)
    other_incident_type = Column(String)
    equipment = Column(String)
    observation = Column(Text)
    previous_incident = Column(String, nullable=False, default="NO")
    risk_analysis_done = Column(String, nullable=False, default="NO")
    procedure_exists = Column(String, nullable=False, default="NO")
    worker_trained = Column(String, nullable=False, default="NO")
    involves_contractor = Column(String, nullable=False, default="NO")
    contractor_name = Column(String)
    nature_and_extent = Column(String, nullable=False)
    possible_causes = Column(Text)
    person_involved_id = Column(Integer, ForeignKey("persons_involved.id"), nullable=False)
    photo_url = Column(String)

    department = relationship(Department)
    subproject = relationship(Subproject)
    person_involved = relationship(PersonInvolved)
    investigation_participants = relationship(
        InvestigationParticipant,
        secondary=incident_report_participants,
        order_by=InvestigationParticipant.id,
    )
    immediate_actions = relationship(
        ImmediateAction,
        secondary=incident_report_actions,
        order_by=ImmediateAction.id,
    )
