"""Record kinds for the communication registers."""

import logging

from esms.modules._infra.crud import RecordKind
from esms.modules.reference import models as reference_models
from esms.utils.timefmt import today_iso

from . import models, schemas

logger = logging.getLogger(__name__)


def prepare_complaint(data: dict, obj=None) -> dict:
    """Keep or default the registration date; a completed complaint gets a closing date.

    The default closing date is today, or the occurrence date when that is later.
    """
    if not data.get("registered_date"):
        data["registered_date"] = getattr(obj, "registered_date", None) or today_iso()
    if data.get("status") == schemas.ComplaintStatus.COMPLETED.value and not data.get("closing_date"):
        data["closing_date"] = max(today_iso(), data.get("date_occurred") or "")
        logger.info(
            "Complaint %s closed without a closing date; using %s",
            data.get("number"),
            data["closing_date"],
        )
    return data


WORKER_GRIEVANCES = RecordKind(
    resource="worker-grievances",
    entity="worker_grievance",
    model=models.WorkerGrievance,
    create_schema=schemas.WorkerGrievanceCreate,
    read_schema=schemas.WorkerGrievanceRead,
    label_field="name",
    search_fields=("name", "company", "grievance_details"),
    order_by="date",
    descending=True,
    links={"acknowledged_by": reference_models.ResponsiblePerson},
    filter_fields=("preferred_language",),
)

COMPLAINTS = RecordKind(
    resource="complaints",
    entity="complaint",
    model=models.Complaint,
    create_schema=schemas.ComplaintCreate,
    read_schema=schemas.ComplaintRead,
    label_field="number",
    search_fields=("number", "local_occurrence", "description"),
    order_by="date_occurred",
    descending=True,
    links={"department": reference_models.Department},
    filter_fields=("department_id", "status", "claim_category"),
    prepare=prepare_complaint,
)
