# medishare/modules/inventory/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from medishare.config.database import get_db
from .service import InventoryService
from .schemas import MedicineCreate, MedicineResponse, InventoryItemCreate, InventoryItemResponse

router = APIRouter()

@router.post("/medicines", response_model=MedicineResponse, status_code=201)
async def add_medicine(
    medicine_data: MedicineCreate,
    db: Session = Depends(get_db)
):
    service = InventoryService(db)
    return await service.add_medicine(medicine_data)

@router.get("/medicines", response_model=List[MedicineResponse])
async def list_medicines(
    category: Optional[str] = Query(None, description="Filter by category"),
    db: Session = Depends(get_db)
):
    service = InventoryService(db)
    return await service.list_medicines(category)

@router.post("", response_model=InventoryItemResponse, status_code=201)
async def add_inventory_item(
    item_data: InventoryItemCreate,
    db: Session = Depends(get_db)
):
    """
    Register a batch in a clinic's inventory

    **Behaviour:**
    - Medicine by id, or by name/strength (created on demand)
    - Status derived from expiry and quantity:
      Expired, Expiring Soon (< 90 days), Low Stock (< 500 units), In Stock
    """
    service = InventoryService(db)
    return await service.add_inventory_item(item_data)

@router.get("/clinic/{clinic_id}", response_model=List[InventoryItemResponse])
async def get_clinic_inventory(clinic_id: int, db: Session = Depends(get_db)):
    service = InventoryService(db)
    return await service.get_clinic_inventory(clinic_id)

@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_inventory_item(item_id: int, db: Session = Depends(get_db)):
    service = InventoryService(db)
    return await service.get_inventory_item(item_id)
