# medishare/modules/clinics/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from medishare.shared.schemas.common import BaseResponse

class ClinicCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Clinic name")
    type: str = Field(..., min_length=1, max_length=100, description="NGO, Primary Health Center, Charitable Hospital...")
    location: Optional[str] = Field(None, max_length=255)
    district: Optional[str] = Field(None, max_length=255)
    state: Optional[str] = Field(None, max_length=255)
    contact_person: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=255)

class ClinicResponse(BaseModel):
    id: int
    name: str
    type: str
    location: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DashboardCounters(BaseModel):
    inventory_items: int = 0
    expiring_soon: int = 0
    low_stock: int = 0
    available_surplus: int = 0
    open_requests: int = 0
    critical_requests: int = 0
    transfers: int = 0
    completed_transfers: int = 0

class ClinicDashboardResponse(BaseResponse):
    clinic: ClinicResponse
    counters: DashboardCounters
