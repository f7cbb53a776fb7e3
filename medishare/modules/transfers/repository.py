# medishare/modules/transfers/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, or_, func
from typing import List, Dict, Any, Optional
import logging

from medishare.shared.database.models import Transfer

logger = logging.getLogger(__name__)

class TransfersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_transfer(self, transfer_data: Dict[str, Any]) -> Transfer:
        """Insert a Pending transfer; the caller owns the commit"""
        transfer = Transfer(
            surplus_posting_id=transfer_data['surplus_posting_id'],
            request_id=transfer_data['request_id'],
            from_clinic_id=transfer_data['from_clinic_id'],
            to_clinic_id=transfer_data['to_clinic_id'],
            inventory_item_id=transfer_data['inventory_item_id'],
            quantity=transfer_data['quantity'],
            status='Pending',
            requested_date=transfer_data['requested_date'],
            notes=transfer_data.get('notes')
        )

        self.db.add(transfer)
        self.db.flush()
        return transfer

    def get_by_id(self, transfer_id: int, for_update: bool = False) -> Optional[Transfer]:
        query = self.db.query(Transfer).filter(Transfer.id == transfer_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_incoming(self, clinic_id: int, status: Optional[str] = None) -> List[Transfer]:
        """Transfers whose stock is headed to the clinic"""
        query = self.db.query(Transfer).filter(Transfer.to_clinic_id == clinic_id)
        if status:
            query = query.filter(Transfer.status == status)
        return query.order_by(Transfer.requested_date.desc(), Transfer.id.desc()).all()

    def get_outgoing(self, clinic_id: int, status: Optional[str] = None) -> List[Transfer]:
        """Transfers drawing on the clinic's stock"""
        query = self.db.query(Transfer).filter(Transfer.from_clinic_id == clinic_id)
        if status:
            query = query.filter(Transfer.status == status)
        return query.order_by(Transfer.requested_date.desc(), Transfer.id.desc()).all()

    def count_for_clinic(self, clinic_id: int, status: Optional[str] = None) -> int:
        conditions = [or_(Transfer.from_clinic_id == clinic_id, Transfer.to_clinic_id == clinic_id)]
        if status:
            conditions.append(Transfer.status == status)
        return self.db.query(func.count(Transfer.id)).filter(and_(*conditions)).scalar() or 0
