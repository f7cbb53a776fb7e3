# medishare/modules/matching/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from medishare.config.database import get_db
from .service import MatchingService
from .schemas import MatchesResponse

router = APIRouter()

@router.get("/matches", response_model=MatchesResponse)
async def get_matches(
    clinic_id: Optional[int] = Query(None, description="Only matches where this clinic gives or receives"),
    limit: Optional[int] = Query(None, gt=0, le=500, description="Maximum number of matches"),
    db: Session = Depends(get_db)
):
    """
    Smart matching between surplus and shortages

    **Score (0-100 for stock that has not expired):**
    - 40% request urgency (Critical 100, High 75, Medium 50, Low 25)
    - 30% expiry pressure (stock closer to expiry scores higher)
    - 30% how much of the request the surplus covers

    Only Available postings and Open requests are paired. Results are
    ordered by score, highest first; equal scores keep a stable order.
    """
    service = MatchingService(db)
    return await service.get_matches(clinic_id, limit)
