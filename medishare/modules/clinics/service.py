# medishare/modules/clinics/service.py
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from medishare.core.exceptions import NotFoundError
from medishare.shared.database.models import Clinic
from medishare.shared.schemas.enums import (
    InventoryStatusEnum, SurplusStatusEnum, RequestStatusEnum,
    TransferStatusEnum, UrgencyEnum
)
from medishare.modules.inventory.repository import InventoryRepository
from medishare.modules.inventory.service import InventoryService
from medishare.modules.surplus.repository import SurplusRepository
from medishare.modules.medicine_requests.repository import RequestsRepository
from medishare.modules.transfers.repository import TransfersRepository
from .repository import ClinicsRepository
from .schemas import ClinicCreate, ClinicResponse, ClinicDashboardResponse, DashboardCounters

logger = logging.getLogger(__name__)

class ClinicsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ClinicsRepository(db)

    async def register_clinic(self, clinic_data: ClinicCreate) -> Clinic:
        """Register a clinic in the network"""
        try:
            clinic = self.repository.create_clinic(clinic_data.model_dump())
            self.db.commit()
            self.db.refresh(clinic)

            logger.info(f"🏥 Clinic registered - ID: {clinic.id} ({clinic.name})")
            return clinic

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error registering clinic")
            raise HTTPException(status_code=500, detail=f"Error registering clinic: {str(e)}")

    async def get_clinic(self, clinic_id: int) -> Clinic:
        clinic = self.repository.get_by_id(clinic_id)
        if not clinic:
            raise NotFoundError(f"Clinic {clinic_id} not found", {"clinic_id": clinic_id})
        return clinic

    async def list_clinics(self, state: Optional[str] = None) -> List[Clinic]:
        return self.repository.get_all(state)

    async def get_dashboard(self, clinic_id: int) -> ClinicDashboardResponse:
        """Headline counters for one clinic's dashboard, over freshly classified inventory"""
        clinic = await self.get_clinic(clinic_id)
        await InventoryService(self.db).get_clinic_inventory(clinic_id)

        inventory = InventoryRepository(self.db)
        surplus = SurplusRepository(self.db)
        requests = RequestsRepository(self.db)
        transfers = TransfersRepository(self.db)

        counters = DashboardCounters(
            inventory_items=inventory.count_items(clinic_id),
            expiring_soon=inventory.count_items(clinic_id, InventoryStatusEnum.EXPIRING_SOON.value),
            low_stock=inventory.count_items(clinic_id, InventoryStatusEnum.LOW_STOCK.value),
            available_surplus=surplus.count_postings(clinic_id, SurplusStatusEnum.AVAILABLE.value),
            open_requests=requests.count_requests(clinic_id, RequestStatusEnum.OPEN.value),
            critical_requests=requests.count_requests(clinic_id, urgency=UrgencyEnum.CRITICAL.value),
            transfers=transfers.count_for_clinic(clinic_id),
            completed_transfers=transfers.count_for_clinic(clinic_id, TransferStatusEnum.COMPLETED.value)
        )

        return ClinicDashboardResponse(
            success=True,
            message=f"Dashboard for {clinic.name}",
            clinic=ClinicResponse.model_validate(clinic),
            counters=counters
        )
