from sqlalchemy import Column, Integer, String, Text

from .base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ts_iso = Column(String, nullable=False)
    entity = Column(String, nullable=False, index=True)
    entity_id = Column(Integer, nullable=True)
    action = Column(String, nullable=False)
    field = Column(String, nullable=True)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)
