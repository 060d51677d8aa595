"""Training matrix table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from esms.modules._infra.base import Base, TimestampMixin
from esms.modules.reference.models import Position, ToolboxTalk, Training


class TrainingMatrixEntry(TimestampMixin, Base):
    __tablename__ = "training_matrix"

    id = Column(Integer, primary_key=True)
    date = Column(String)
    position_id = Column(Integer, ForeignKey("positions.id"), nullable=False, index=True)
    training_id = Column(Integer, ForeignKey("trainings.id"), nullable=False, index=True)
    toolbox_talk_id = Column(Integer, ForeignKey("toolbox_talks.id"), nullable=False)
    effectiveness = Column(String, nullable=False)
    actions_training_not_effective = Column(Text)
    approved_by = Column(String, nullable=False)

    position = relationship(Position)
    training = relationship(Training)
    toolbox_talk = relationship(ToolboxTalk)
