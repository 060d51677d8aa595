"""Pydantic payloads for the training matrix."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from esms.modules._infra.links import LinkRef
from esms.modules._infra.validators import OptionalIsoDate, OptionalText, RequiredText
from esms.modules._infra.visibility import VisibilityRule, blank_hidden
from esms.modules.reference.schemas import NamedRead


class Effectiveness(str, Enum):
    EFFECTIVE = "EFFECTIVE"
    NOT_EFFECTIVE = "NOT_EFFECTIVE"


TRAINING_VISIBILITY = (
    VisibilityRule.when(
        "actions_training_not_effective", "effectiveness", Effectiveness.NOT_EFFECTIVE.value
    ),
)


class TrainingMatrixCreate(BaseModel):
    date: OptionalIsoDate = None
    position: LinkRef
    training: LinkRef
    toolbox_talk: LinkRef
    effectiveness: Effectiveness
    actions_training_not_effective: OptionalText = None
    approved_by: RequiredText

    @model_validator(mode="after")
    def clear_hidden_fields(self) -> "TrainingMatrixCreate":
        return blank_hidden(self, TRAINING_VISIBILITY)


class TrainingMatrixRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: Optional[str] = None
    position_id: int
    position: NamedRead
    training_id: int
    training: NamedRead
    toolbox_talk_id: int
    toolbox_talk: NamedRead
    effectiveness: Effectiveness
    actions_training_not_effective: Optional[str] = None
    approved_by: str
