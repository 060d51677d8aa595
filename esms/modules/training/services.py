"""Record kind for the training matrix."""

from esms.modules._infra.crud import RecordKind
from esms.modules.reference import models as reference_models

from . import models, schemas

TRAINING_MATRIX = RecordKind(
    resource="training-matrix",
    entity="training_matrix_entry",
    model=models.TrainingMatrixEntry,
    create_schema=schemas.TrainingMatrixCreate,
    read_schema=schemas.TrainingMatrixRead,
    label_field="approved_by",
    search_fields=("approved_by", "actions_training_not_effective"),
    order_by="created_at",
    descending=True,
    links={
        "position": reference_models.Position,
        "training": reference_models.Training,
        "toolbox_talk": reference_models.ToolboxTalk,
    },
    filter_fields=("position_id", "training_id", "effectiveness"),
)
