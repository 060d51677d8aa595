"""Document registry table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin
from esms.modules.reference.models import DocumentType


class Document(TimestampMixin, Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    code = Column(String, nullable=False, index=True)
    creation_date = Column(String, nullable=False)
    revision_date = Column(String, nullable=False)
    document_name = Column(String, nullable=False)
    document_type_id = Column(Integer, ForeignKey("document_types.id"), nullable=False, index=True)
    document_path = Column(String, nullable=False)
    document_state = Column(String, nullable=False)
    retention_period = Column(String, nullable=False)
    disposal_method = Column(String, nullable=False)
    observation = Column(Text)

    document_type = relationship(DocumentType)
