# medishare/modules/inventory/service.py
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from medishare.core.exceptions import NotFoundError
from medishare.shared.database.models import InventoryItem, Medicine
from medishare.shared.services.inventory_status import InventoryStatusService
from medishare.modules.clinics.repository import ClinicsRepository
from .repository import InventoryRepository
from .schemas import InventoryItemCreate, MedicineCreate

logger = logging.getLogger(__name__)

class InventoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = InventoryRepository(db)
        self.clinics_repository = ClinicsRepository(db)

    async def add_medicine(self, medicine_data: MedicineCreate) -> Medicine:
        """Add a medicine to the shared catalogue"""
        try:
            medicine = self.repository.create_medicine(medicine_data.model_dump(mode="json"))
            self.db.commit()
            self.db.refresh(medicine)
            logger.info(f"💊 Medicine added - ID: {medicine.id} ({medicine.name} {medicine.strength or ''})")
            return medicine

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error adding medicine")
            raise HTTPException(status_code=500, detail=f"Error adding medicine: {str(e)}")

    async def list_medicines(self, category: Optional[str] = None) -> List[Medicine]:
        return self.repository.get_medicines(category)

    async def add_inventory_item(self, item_data: InventoryItemCreate) -> InventoryItem:
        """
        Register a batch in a clinic's inventory

        The medicine is resolved by id, or by name/strength from the
        catalogue, and created when it is not there yet. Status is derived
        from quantity and expiry.
        """
        try:
            if not self.clinics_repository.get_by_id(item_data.clinic_id):
                raise NotFoundError(f"Clinic {item_data.clinic_id} not found", {"clinic_id": item_data.clinic_id})

            medicine = self._resolve_medicine(item_data)

            status = InventoryStatusService.classify(item_data.quantity, item_data.expiry_date)

            item = self.repository.create_item(
                {
                    "medicine_id": medicine.id,
                    "batch_number": item_data.batch_number,
                    "quantity": item_data.quantity,
                    "unit": item_data.unit,
                    "expiry_date": item_data.expiry_date,
                    "status": status.value
                },
                item_data.clinic_id
            )

            self.db.commit()
            self.db.refresh(item)

            logger.info(f"📦 Inventory item added - ID: {item.id}")
            logger.info(f"   Clinic: {item.clinic_id} | Medicine: {medicine.name} | Batch: {item.batch_number}")
            logger.info(f"   Quantity: {item.quantity} {item.unit} | Status: {item.status}")
            return item

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error adding inventory item")
            raise HTTPException(status_code=500, detail=f"Error adding inventory item: {str(e)}")

    def _resolve_medicine(self, item_data: InventoryItemCreate) -> Medicine:
        if item_data.medicine_id is not None:
            medicine = self.repository.get_medicine(item_data.medicine_id)
            if not medicine:
                raise NotFoundError(f"Medicine {item_data.medicine_id} not found", {"medicine_id": item_data.medicine_id})
            return medicine

        medicine = self.repository.find_medicine(item_data.medicine.name, item_data.medicine.strength)
        if medicine:
            return medicine

        logger.info(f"   🆕 Medicine '{item_data.medicine.name}' not in catalogue, creating it")
        return self.repository.create_medicine(item_data.medicine.model_dump(mode="json"))

    async def get_inventory_item(self, item_id: int) -> InventoryItem:
        item = self.repository.get_item(item_id)
        if not item:
            raise NotFoundError(f"Inventory item {item_id} not found", {"inventory_item_id": item_id})
        return item

    async def get_clinic_inventory(self, clinic_id: int, refresh_status: bool = True) -> List[InventoryItem]:
        """
        Inventory of one clinic

        Statuses age with the calendar, so they are recomputed on read and
        persisted when any changed.
        """
        items = self.repository.get_items(clinic_id=clinic_id)
        if not refresh_status:
            return items

        changed = 0
        for item in items:
            previous = item.status
            if InventoryStatusService.refresh(item) != previous:
                changed += 1

        if changed:
            self.db.commit()
            logger.info(f"🔄 {changed} inventory status(es) reclassified for clinic {clinic_id}")
        return items
