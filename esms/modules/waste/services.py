"""Record kinds and totals for the waste registers."""

from __future__ import annotations

from typing import Mapping, Optional

from esms.modules._infra.crud import RecordKind, list_records

from . import models, schemas

WASTE_TRANSFER_LOG = RecordKind(
    resource="waste-transfer-log",
    entity="waste_transfer_log",
    model=models.WasteTransferLog,
    create_schema=schemas.WasteTransferLogCreate,
    read_schema=schemas.WasteTransferLogRead,
    label_field="reference_number",
    search_fields=("waste_type", "reference_number", "transfer_company"),
    order_by="created_at",
    descending=True,
    filter_fields=("waste_type", "transfer_company"),
)

WASTE_MANAGEMENT = RecordKind(
    resource="waste-management",
    entity="waste_management_plan",
    model=models.WasteManagementPlan,
    create_schema=schemas.WasteManagementCreate,
    read_schema=schemas.WasteManagementRead,
    label_field="waste_route",
    search_fields=("waste_route", "disposal_company", "transportation_company_method"),
    order_by="created_at",
    descending=True,
)


def transferred_totals(filters: Optional[Mapping[str, str]] = None) -> dict:
    """Sum the transferred quantity per waste type, largest first."""
    totals: dict = {}
    for row in list_records(WASTE_TRANSFER_LOG, filters=filters):
        totals[row.waste_type] = totals.get(row.waste_type, 0.0) + row.how_much_waste
    return dict(sorted(totals.items(), key=lambda item: (-item[1], item[0])))
