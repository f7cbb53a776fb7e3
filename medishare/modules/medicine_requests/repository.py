# medishare/modules/medicine_requests/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, func
from typing import List, Dict, Any, Optional
from datetime import datetime

from medishare.shared.database.models import MedicineRequest

class RequestsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_request(self, request_data: Dict[str, Any], clinic_id: int) -> MedicineRequest:
        """Declare a shortage"""
        request = MedicineRequest(
            clinic_id=clinic_id,
            medicine_id=request_data['medicine_id'],
            quantity=request_data['quantity'],
            unit=request_data.get('unit') or 'tablets',
            urgency=request_data['urgency'],
            notes=request_data.get('notes'),
            status='Open',
            requested_date=datetime.now()
        )

        self.db.add(request)
        self.db.flush()
        return request

    def get_by_id(self, request_id: int, for_update: bool = False) -> Optional[MedicineRequest]:
        query = self.db.query(MedicineRequest).filter(MedicineRequest.id == request_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_requests(
        self,
        clinic_id: Optional[int] = None,
        status: Optional[str] = None,
        medicine_id: Optional[int] = None
    ) -> List[MedicineRequest]:
        query = self.db.query(MedicineRequest)
        if clinic_id is not None:
            query = query.filter(MedicineRequest.clinic_id == clinic_id)
        if status:
            query = query.filter(MedicineRequest.status == status)
        if medicine_id is not None:
            query = query.filter(MedicineRequest.medicine_id == medicine_id)
        return query.order_by(MedicineRequest.id).all()

    def count_requests(self, clinic_id: int, status: Optional[str] = None, urgency: Optional[str] = None) -> int:
        conditions = [MedicineRequest.clinic_id == clinic_id]
        if status:
            conditions.append(MedicineRequest.status == status)
        if urgency:
            conditions.append(MedicineRequest.urgency == urgency)
        return self.db.query(func.count(MedicineRequest.id)).filter(and_(*conditions)).scalar() or 0
