# medishare/modules/medicine_requests/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from medishare.config.database import get_db
from medishare.shared.schemas.enums import RequestStatusEnum
from .service import RequestsService
from .schemas import MedicineRequestCreate, MedicineRequestResponse

router = APIRouter()

@router.post("", response_model=MedicineRequestResponse, status_code=201)
async def create_request(
    request_data: MedicineRequestCreate,
    db: Session = Depends(get_db)
):
    """
    Declare a medicine shortage

    Urgency (Critical, High, Medium, Low) weighs 40% of every match score.
    """
    service = RequestsService(db)
    return await service.create_request(request_data)

@router.get("", response_model=List[MedicineRequestResponse])
async def list_requests(
    clinic_id: Optional[int] = Query(None, description="Only requests of this clinic"),
    status: Optional[RequestStatusEnum] = Query(None, description="Only requests in this status"),
    medicine_id: Optional[int] = Query(None, description="Only requests for this medicine"),
    db: Session = Depends(get_db)
):
    service = RequestsService(db)
    return await service.list_requests(clinic_id, status, medicine_id)

@router.get("/{request_id}", response_model=MedicineRequestResponse)
async def get_request(request_id: int, db: Session = Depends(get_db)):
    service = RequestsService(db)
    return await service.get_request(request_id)

@router.post("/{request_id}/cancel", response_model=MedicineRequestResponse)
async def cancel_request(request_id: int, db: Session = Depends(get_db)):
    """Cancel an Open request"""
    service = RequestsService(db)
    return await service.cancel_request(request_id)
