# medishare/modules/medicine_requests/service.py
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from medishare.core.exceptions import NotFoundError, InvalidStateError
from medishare.shared.database.models import MedicineRequest
from medishare.shared.schemas.enums import RequestStatusEnum
from medishare.modules.clinics.repository import ClinicsRepository
from medishare.modules.inventory.repository import InventoryRepository
from .repository import RequestsRepository
from .schemas import MedicineRequestCreate

logger = logging.getLogger(__name__)

class RequestsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RequestsRepository(db)
        self.clinics_repository = ClinicsRepository(db)
        self.inventory_repository = InventoryRepository(db)

    async def create_request(self, request_data: MedicineRequestCreate) -> MedicineRequest:
        """Declare a shortage that the matching engine can pair with surplus"""
        try:
            if not self.clinics_repository.get_by_id(request_data.clinic_id):
                raise NotFoundError(f"Clinic {request_data.clinic_id} not found", {"clinic_id": request_data.clinic_id})

            medicine = self.inventory_repository.get_medicine(request_data.medicine_id)
            if not medicine:
                raise NotFoundError(f"Medicine {request_data.medicine_id} not found", {"medicine_id": request_data.medicine_id})

            request = self.repository.create_request(request_data.model_dump(mode="json"), request_data.clinic_id)
            self.db.commit()
            self.db.refresh(request)

            logger.info(f"📥 Request created - ID: {request.id}")
            logger.info(f"   Clinic: {request.clinic_id} | Medicine: {medicine.name} | Quantity: {request.quantity} | Urgency: {request.urgency}")
            return request

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error creating request")
            raise HTTPException(status_code=500, detail=f"Error creating request: {str(e)}")

    async def cancel_request(self, request_id: int) -> MedicineRequest:
        """Withdraw an Open request; matched or fulfilled ones are locked"""
        try:
            request = self.repository.get_by_id(request_id, for_update=True)
            if not request:
                raise NotFoundError(f"Request {request_id} not found", {"request_id": request_id})

            if request.status != RequestStatusEnum.OPEN.value:
                raise InvalidStateError(
                    f"Only Open requests can be cancelled. Current status: {request.status}",
                    {"request_id": request_id, "status": request.status}
                )

            request.status = RequestStatusEnum.CANCELLED.value
            self.db.commit()
            self.db.refresh(request)

            logger.info(f"🚫 Request {request_id} cancelled")
            return request

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error cancelling request")
            raise HTTPException(status_code=500, detail=f"Error cancelling request: {str(e)}")

    async def get_request(self, request_id: int) -> MedicineRequest:
        request = self.repository.get_by_id(request_id)
        if not request:
            raise NotFoundError(f"Request {request_id} not found", {"request_id": request_id})
        return request

    async def list_requests(
        self,
        clinic_id: Optional[int] = None,
        status: Optional[RequestStatusEnum] = None,
        medicine_id: Optional[int] = None
    ) -> List[MedicineRequest]:
        return self.repository.get_requests(clinic_id, status.value if status else None, medicine_id)
