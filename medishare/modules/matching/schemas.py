# medishare/modules/matching/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional

from medishare.shared.schemas.common import BaseResponse, ClinicInfo

class MatchMedicineInfo(BaseModel):
    medicine_id: int
    name: str
    generic_name: Optional[str] = None
    strength: Optional[str] = None

class MatchInfo(BaseModel):
    surplus_posting_id: int
    request_id: int
    inventory_item_id: int
    medicine: MatchMedicineInfo
    from_clinic: ClinicInfo
    to_clinic: ClinicInfo
    surplus_quantity: int
    requested_quantity: int
    transferable_quantity: int = Field(..., description="min(surplus, requested)")
    urgency: str
    batch_number: str
    days_until_expiry: int
    quantity_ratio: float
    match_score: int = Field(..., description="Compatibility score, higher is better")

class MatchesResponse(BaseResponse):
    total: int
    clinic_id: Optional[int] = None
    matches: List[MatchInfo]
