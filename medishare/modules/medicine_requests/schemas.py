# medishare/modules/medicine_requests/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from medishare.shared.schemas.enums import UrgencyEnum, RequestStatusEnum

class MedicineRequestCreate(BaseModel):
    clinic_id: int = Field(..., gt=0, description="Clinic declaring the shortage")
    medicine_id: int = Field(..., gt=0, description="Medicine needed")
    quantity: int = Field(..., gt=0, description="Units needed")
    unit: str = Field(default="tablets", max_length=50)
    urgency: UrgencyEnum = Field(default=UrgencyEnum.MEDIUM)
    notes: Optional[str] = Field(None, max_length=500)

class MedicineRequestResponse(BaseModel):
    id: int
    clinic_id: int
    medicine_id: int
    quantity: int
    unit: str
    urgency: UrgencyEnum
    status: RequestStatusEnum
    requested_date: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True
