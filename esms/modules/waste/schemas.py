"""Pydantic payloads for the waste registers."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from esms.modules._infra.validators import IsoDate, OptionalText, min_text

ShortText = min_text(2)


class WasteTransferLogCreate(BaseModel):
    waste_type: ShortText
    how_is_waste_contained: ShortText
    how_much_waste: float = Field(ge=0)
    reference_number: ShortText
    date_of_removal: IsoDate
    transfer_company: ShortText
    special_instructions: OptionalText = None


class WasteTransferLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    waste_type: str
    how_is_waste_contained: str
    how_much_waste: float
    reference_number: str
    date_of_removal: str
    transfer_company: str
    special_instructions: Optional[str] = None


class WasteManagementCreate(BaseModel):
    waste_route: ShortText
    labelling: ShortText
    storage: ShortText
    transportation_company_method: ShortText
    disposal_company: ShortText
    special_instructions: OptionalText = None


class WasteManagementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    waste_route: str
    labelling: str
    storage: str
    transportation_company_method: str
    disposal_company: str
    special_instructions: Optional[str] = None
