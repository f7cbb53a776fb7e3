# medishare/modules/surplus/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from medishare.shared.schemas.enums import SurplusReasonEnum, SurplusStatusEnum

class SurplusPostingCreate(BaseModel):
    clinic_id: int = Field(..., gt=0, description="Clinic offering the stock")
    inventory_item_id: int = Field(..., gt=0, description="Inventory item the surplus is drawn from")
    quantity: int = Field(..., gt=0, description="Units offered")
    reason: SurplusReasonEnum = Field(default=SurplusReasonEnum.NEAR_EXPIRY)
    notes: Optional[str] = Field(None, max_length=500)

class SurplusPostingResponse(BaseModel):
    id: int
    clinic_id: int
    inventory_item_id: int
    quantity: int
    reason: SurplusReasonEnum
    status: SurplusStatusEnum
    posted_date: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True
