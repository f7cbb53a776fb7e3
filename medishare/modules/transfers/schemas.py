# medishare/modules/transfers/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from medishare.shared.schemas.common import BaseResponse
from medishare.shared.schemas.enums import TransferStatusEnum

class TransferProposal(BaseModel):
    surplus_posting_id: int = Field(..., gt=0, description="Available surplus posting")
    request_id: int = Field(..., gt=0, description="Open request for the same medicine")
    notes: Optional[str] = Field(None, max_length=500, description="Notes for the giving clinic")

class TransferRejection(BaseModel):
    reason: Optional[str] = Field(None, max_length=500, description="Why the transfer was rejected")

class TransferResponse(BaseModel):
    id: int
    surplus_posting_id: Optional[int] = None
    request_id: Optional[int] = None
    from_clinic_id: int
    to_clinic_id: int
    inventory_item_id: int
    quantity: int
    status: TransferStatusEnum
    requested_date: datetime
    approved_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class TransferActionResponse(BaseResponse):
    transfer: TransferResponse
    next_step: Optional[str] = None

class ClinicTransfersResponse(BaseResponse):
    clinic_id: int
    incoming: List[TransferResponse]
    outgoing: List[TransferResponse]
