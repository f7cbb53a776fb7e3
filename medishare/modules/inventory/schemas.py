# medishare/modules/inventory/schemas.py
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import date, datetime

from medishare.shared.schemas.enums import MedicinePriorityEnum, InventoryStatusEnum

class MedicineCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Brand or common name")
    generic_name: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=100, description="Antibiotic, Painkiller...")
    strength: Optional[str] = Field(None, max_length=50, description="e.g. 500mg")
    manufacturer: Optional[str] = Field(None, max_length=255)
    priority: MedicinePriorityEnum = Field(default=MedicinePriorityEnum.STANDARD)

class MedicineResponse(BaseModel):
    id: int
    name: str
    generic_name: Optional[str] = None
    category: Optional[str] = None
    strength: Optional[str] = None
    manufacturer: Optional[str] = None
    priority: str

    class Config:
        from_attributes = True

class InventoryItemCreate(BaseModel):
    """
    Inventory entry for a clinic

    Either reference a catalogue medicine with ``medicine_id`` or describe it
    in ``medicine``; an unknown medicine is added to the catalogue.
    """
    clinic_id: int = Field(..., gt=0, description="Owning clinic")
    medicine_id: Optional[int] = Field(None, gt=0, description="Existing catalogue medicine")
    medicine: Optional[MedicineCreate] = Field(None, description="Medicine to look up or create")
    batch_number: str = Field(..., min_length=1, max_length=100)
    quantity: int = Field(..., ge=0, description="Units on hand")
    unit: str = Field(default="tablets", max_length=50)
    expiry_date: date

    @model_validator(mode="after")
    def check_medicine_reference(self):
        if self.medicine_id is None and self.medicine is None:
            raise ValueError("Either medicine_id or medicine must be provided")
        return self

class InventoryItemResponse(BaseModel):
    id: int
    clinic_id: int
    medicine_id: int
    batch_number: str
    quantity: int
    unit: str
    expiry_date: date
    status: InventoryStatusEnum
    added_date: datetime

    class Config:
        from_attributes = True
