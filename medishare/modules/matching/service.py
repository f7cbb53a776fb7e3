# medishare/modules/matching/service.py
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from medishare.shared.schemas.common import ClinicInfo
from medishare.shared.schemas.enums import SurplusStatusEnum, RequestStatusEnum
from medishare.modules.clinics.repository import ClinicsRepository
from medishare.modules.inventory.repository import InventoryRepository
from medishare.modules.surplus.repository import SurplusRepository
from medishare.modules.medicine_requests.repository import RequestsRepository
from .finder import Match, find_matches, filter_for_clinic
from .schemas import MatchInfo, MatchMedicineInfo, MatchesResponse

logger = logging.getLogger(__name__)

class MatchingService:
    """Loads a snapshot of the store and runs the match finder over it"""

    def __init__(self, db: Session):
        self.db = db
        self.clinics_repository = ClinicsRepository(db)
        self.inventory_repository = InventoryRepository(db)
        self.surplus_repository = SurplusRepository(db)
        self.requests_repository = RequestsRepository(db)

    def find_matches(self, now: Optional[datetime] = None) -> List[Match]:
        """All ranked matches, recomputed from the current store contents"""
        return find_matches(
            surplus_posts=self.surplus_repository.get_postings(status=SurplusStatusEnum.AVAILABLE.value),
            requests=self.requests_repository.get_requests(status=RequestStatusEnum.OPEN.value),
            inventory=self.inventory_repository.get_items(),
            medicines=self.inventory_repository.get_medicines(),
            clinics=self.clinics_repository.get_all(),
            now=now
        )

    async def get_matches(self, clinic_id: Optional[int] = None, limit: Optional[int] = None) -> MatchesResponse:
        """Ranked matches, optionally only those where the clinic gives or receives"""
        matches = self.find_matches()
        if clinic_id is not None:
            matches = filter_for_clinic(matches, clinic_id)
        if limit is not None:
            matches = matches[:limit]

        logger.info(f"🔍 {len(matches)} match(es) found" + (f" for clinic {clinic_id}" if clinic_id is not None else ""))

        return MatchesResponse(
            success=True,
            message=f"{len(matches)} match(es) found",
            total=len(matches),
            clinic_id=clinic_id,
            matches=[self._to_match_info(m) for m in matches]
        )

    @staticmethod
    def _clinic_info(clinic) -> ClinicInfo:
        return ClinicInfo(
            clinic_id=clinic.id,
            clinic_name=clinic.name,
            clinic_type=clinic.type,
            location=clinic.location,
            state=clinic.state
        )

    def _to_match_info(self, match: Match) -> MatchInfo:
        return MatchInfo(
            surplus_posting_id=match.surplus.id,
            request_id=match.request.id,
            inventory_item_id=match.inventory_item.id,
            medicine=MatchMedicineInfo(
                medicine_id=match.medicine.id,
                name=match.medicine.name,
                generic_name=match.medicine.generic_name,
                strength=match.medicine.strength
            ),
            from_clinic=self._clinic_info(match.from_clinic),
            to_clinic=self._clinic_info(match.to_clinic),
            surplus_quantity=match.surplus.quantity,
            requested_quantity=match.request.quantity,
            transferable_quantity=min(match.surplus.quantity, match.request.quantity),
            urgency=match.request.urgency,
            batch_number=match.inventory_item.batch_number,
            days_until_expiry=match.days_until_expiry,
            quantity_ratio=round(match.quantity_ratio, 4),
            match_score=match.match_score
        )
