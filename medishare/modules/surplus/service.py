# medishare/modules/surplus/service.py
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from medishare.core.exceptions import NotFoundError, InvalidStateError, DataIntegrityError
from medishare.shared.database.models import SurplusPosting
from medishare.shared.schemas.enums import SurplusStatusEnum, InventoryStatusEnum
from medishare.shared.services.inventory_status import InventoryStatusService
from medishare.modules.clinics.repository import ClinicsRepository
from medishare.modules.inventory.repository import InventoryRepository
from .repository import SurplusRepository
from .schemas import SurplusPostingCreate

logger = logging.getLogger(__name__)

class SurplusService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SurplusRepository(db)
        self.inventory_repository = InventoryRepository(db)
        self.clinics_repository = ClinicsRepository(db)

    async def post_surplus(self, posting_data: SurplusPostingCreate) -> SurplusPosting:
        """
        Offer part of an inventory item to other clinics

        The item must belong to the posting clinic, still hold stock, not be
        expired, and cover the posted quantity.
        """
        try:
            if not self.clinics_repository.get_by_id(posting_data.clinic_id):
                raise NotFoundError(f"Clinic {posting_data.clinic_id} not found", {"clinic_id": posting_data.clinic_id})

            item = self.inventory_repository.get_item(posting_data.inventory_item_id)
            if not item:
                raise NotFoundError(
                    f"Inventory item {posting_data.inventory_item_id} not found",
                    {"inventory_item_id": posting_data.inventory_item_id}
                )

            if item.clinic_id != posting_data.clinic_id:
                raise DataIntegrityError(
                    f"Inventory item {item.id} belongs to clinic {item.clinic_id}, not {posting_data.clinic_id}",
                    {"inventory_item_id": item.id, "owner_clinic_id": item.clinic_id}
                )

            if InventoryStatusService.refresh(item) == InventoryStatusEnum.EXPIRED.value:
                raise InvalidStateError(
                    f"Inventory item {item.id} has expired and cannot be posted as surplus",
                    {"inventory_item_id": item.id, "expiry_date": item.expiry_date.isoformat()}
                )

            if item.quantity <= 0 or posting_data.quantity > item.quantity:
                raise DataIntegrityError(
                    f"Surplus quantity exceeds stock. Available: {item.quantity}, Posted: {posting_data.quantity}",
                    {"available": item.quantity, "requested": posting_data.quantity}
                )

            posting = self.repository.create_posting(posting_data.model_dump(mode="json"), posting_data.clinic_id)
            self.db.commit()
            self.db.refresh(posting)

            logger.info(f"📤 Surplus posted - ID: {posting.id}")
            logger.info(f"   Clinic: {posting.clinic_id} | Item: {item.id} | Quantity: {posting.quantity} | Reason: {posting.reason}")
            return posting

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error posting surplus")
            raise HTTPException(status_code=500, detail=f"Error posting surplus: {str(e)}")

    async def cancel_surplus(self, posting_id: int) -> SurplusPosting:
        """Withdraw an Available posting; reserved or transferred ones are locked"""
        try:
            posting = self.repository.get_by_id(posting_id, for_update=True)
            if not posting:
                raise NotFoundError(f"Surplus posting {posting_id} not found", {"surplus_posting_id": posting_id})

            if posting.status != SurplusStatusEnum.AVAILABLE.value:
                raise InvalidStateError(
                    f"Only Available postings can be cancelled. Current status: {posting.status}",
                    {"surplus_posting_id": posting_id, "status": posting.status}
                )

            posting.status = SurplusStatusEnum.CANCELLED.value
            self.db.commit()
            self.db.refresh(posting)

            logger.info(f"🚫 Surplus posting {posting_id} cancelled")
            return posting

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error cancelling surplus posting")
            raise HTTPException(status_code=500, detail=f"Error cancelling surplus posting: {str(e)}")

    async def get_posting(self, posting_id: int) -> SurplusPosting:
        posting = self.repository.get_by_id(posting_id)
        if not posting:
            raise NotFoundError(f"Surplus posting {posting_id} not found", {"surplus_posting_id": posting_id})
        return posting

    async def list_postings(self, clinic_id: Optional[int] = None, status: Optional[SurplusStatusEnum] = None) -> List[SurplusPosting]:
        return self.repository.get_postings(clinic_id, status.value if status else None)
