"""Waste register tables."""

from sqlalchemy import Column, Float, Integer, String, Text

from esms.modules._infra.base import Base, TimestampMixin


class WasteTransferLog(TimestampMixin, Base):
    __tablename__ = "waste_transfer_logs"

    id = Column(Integer, primary_key=True)
    waste_type = Column(String, nullable=False, index=True)
    how_is_waste_contained = Column(String, nullable=False)
    how_much_waste = Column(Float, nullable=False)
    reference_number = Column(String, nullable=False, index=True)
    date_of_removal = Column(String, nullable=False)
    transfer_company = Column(String, nullable=False)
    special_instructions = Column(Text)


class WasteManagementPlan(TimestampMixin, Base):
    __tablename__ = "waste_management"

    id = Column(Integer, primary_key=True)
    waste_route = Column(String, nullable=False)
    labelling = Column(String, nullable=False)
    storage = Column(String, nullable=False)
    transportation_company_method = Column(String, nullable=False)
    disposal_company = Column(String, nullable=False)
    special_instructions = Column(Text)
