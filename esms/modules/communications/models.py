"""Worker grievance and complaint tables."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin
from esms.modules.reference.models import Department, ResponsiblePerson


class WorkerGrievance(TimestampMixin, Base):
    __tablename__ = "worker_grievances"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    company = Column(String, nullable=False)
    date = Column(String, nullable=False, index=True)
    preferred_contact_method = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    preferred_language = Column(String, nullable=False)
    other_language = Column(String)
    grievance_details = Column(Text, nullable=False)
    acknowledged_by_id = Column(Integer, ForeignKey("responsible_persons.id"))
    acknowledgement_reference = Column(String)
    acknowledged_by_name = Column(String)
    acknowledged_by_position = Column(String)
    acknowledgement_date = Column(String)
    acknowledgement_signature = Column(String)
    follow_up_details = Column(Text)
    closed_out_date = Column(String)
    response_signature = Column(String)
    response_receipt_acknowledged = Column(String)
    response_acknowledged_by_name = Column(String)
    response_acknowledged_by_signature = Column(String)
    response_acknowledgement_date = Column(String)

    acknowledged_by = relationship(ResponsiblePerson)


class Complaint(TimestampMixin, Base):
    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True)
    number = Column(String, nullable=False, index=True)
    date_occurred = Column(String, nullable=False, index=True)
    local_occurrence = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    who_involved = Column(String)
    registered_date = Column(String)
    complainant_gender = Column(String, nullable=False)
    complainant_age = Column(Integer)
    anonymous_complaint = Column(String, nullable=False)
    telephone = Column(String, nullable=False)
    email = Column(String)
    complainant_address = Column(String)
    claim_category = Column(String, nullable=False)
    other_claim_category = Column(String)
    department_id = Column(Integer, ForeignKey("departments.id"), index=True)
    status = Column(String, nullable=False, default="PENDING")
    action_taken = Column(Text)
    closing_date = Column(String)

    department = relationship(Department)
