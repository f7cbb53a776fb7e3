# medishare/modules/clinics/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from medishare.config.database import get_db
from .service import ClinicsService
from .schemas import ClinicCreate, ClinicResponse, ClinicDashboardResponse

router = APIRouter()

@router.post("", response_model=ClinicResponse, status_code=201)
async def register_clinic(
    clinic_data: ClinicCreate,
    db: Session = Depends(get_db)
):
    """
    Register a clinic in the sharing network

    Identity and login are handled outside this service; the returned id is
    what every other endpoint uses to refer to the clinic.
    """
    service = ClinicsService(db)
    return await service.register_clinic(clinic_data)

@router.get("", response_model=List[ClinicResponse])
async def list_clinics(
    state: Optional[str] = Query(None, description="Filter by state"),
    db: Session = Depends(get_db)
):
    service = ClinicsService(db)
    return await service.list_clinics(state)

@router.get("/{clinic_id}", response_model=ClinicResponse)
async def get_clinic(clinic_id: int, db: Session = Depends(get_db)):
    service = ClinicsService(db)
    return await service.get_clinic(clinic_id)

@router.get("/{clinic_id}/dashboard", response_model=ClinicDashboardResponse)
async def get_clinic_dashboard(clinic_id: int, db: Session = Depends(get_db)):
    """
    Dashboard counters for a clinic

    **Includes:**
    - Inventory items, expiring soon and low stock
    - Available surplus postings
    - Open and critical requests
    - Transfers involving the clinic and how many completed
    """
    service = ClinicsService(db)
    return await service.get_dashboard(clinic_id)
