# medishare/modules/surplus/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from medishare.config.database import get_db
from medishare.shared.schemas.enums import SurplusStatusEnum
from .service import SurplusService
from .schemas import SurplusPostingCreate, SurplusPostingResponse

router = APIRouter()

@router.post("", response_model=SurplusPostingResponse, status_code=201)
async def post_surplus(
    posting_data: SurplusPostingCreate,
    db: Session = Depends(get_db)
):
    """
    Post surplus stock for other clinics

    **Validations:**
    - Inventory item belongs to the posting clinic
    - Item is not expired and has stock
    - Posted quantity does not exceed the item's quantity
    """
    service = SurplusService(db)
    return await service.post_surplus(posting_data)

@router.get("", response_model=List[SurplusPostingResponse])
async def list_surplus(
    clinic_id: Optional[int] = Query(None, description="Only postings of this clinic"),
    status: Optional[SurplusStatusEnum] = Query(None, description="Only postings in this status"),
    db: Session = Depends(get_db)
):
    service = SurplusService(db)
    return await service.list_postings(clinic_id, status)

@router.get("/{posting_id}", response_model=SurplusPostingResponse)
async def get_surplus(posting_id: int, db: Session = Depends(get_db)):
    service = SurplusService(db)
    return await service.get_posting(posting_id)

@router.post("/{posting_id}/cancel", response_model=SurplusPostingResponse)
async def cancel_surplus(posting_id: int, db: Session = Depends(get_db)):
    """Cancel an Available posting"""
    service = SurplusService(db)
    return await service.cancel_surplus(posting_id)
