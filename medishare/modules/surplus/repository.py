# medishare/modules/surplus/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, func
from typing import List, Dict, Any, Optional
from datetime import datetime

from medishare.shared.database.models import SurplusPosting

class SurplusRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_posting(self, posting_data: Dict[str, Any], clinic_id: int) -> SurplusPosting:
        """Post part of an inventory item as surplus"""
        posting = SurplusPosting(
            clinic_id=clinic_id,
            inventory_item_id=posting_data['inventory_item_id'],
            quantity=posting_data['quantity'],
            reason=posting_data['reason'],
            notes=posting_data.get('notes'),
            status='Available',
            posted_date=datetime.now()
        )

        self.db.add(posting)
        self.db.flush()
        return posting

    def get_by_id(self, posting_id: int, for_update: bool = False) -> Optional[SurplusPosting]:
        query = self.db.query(SurplusPosting).filter(SurplusPosting.id == posting_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_postings(self, clinic_id: Optional[int] = None, status: Optional[str] = None) -> List[SurplusPosting]:
        query = self.db.query(SurplusPosting)
        if clinic_id is not None:
            query = query.filter(SurplusPosting.clinic_id == clinic_id)
        if status:
            query = query.filter(SurplusPosting.status == status)
        return query.order_by(SurplusPosting.id).all()

    def count_postings(self, clinic_id: int, status: Optional[str] = None) -> int:
        conditions = [SurplusPosting.clinic_id == clinic_id]
        if status:
            conditions.append(SurplusPosting.status == status)
        return self.db.query(func.count(SurplusPosting.id)).filter(and_(*conditions)).scalar() or 0
