# medishare/modules/inventory/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_, func
from typing import List, Dict, Any, Optional
from datetime import datetime

from medishare.shared.database.models import InventoryItem, Medicine

class InventoryRepository:
    def __init__(self, db: Session):
        self.db = db

    # ========== MEDICINES ==========

    def create_medicine(self, medicine_data: Dict[str, Any]) -> Medicine:
        """Add a medicine to the catalogue"""
        medicine = Medicine(
            name=medicine_data['name'],
            generic_name=medicine_data.get('generic_name'),
            category=medicine_data.get('category'),
            strength=medicine_data.get('strength'),
            manufacturer=medicine_data.get('manufacturer'),
            priority=medicine_data.get('priority') or 'Standard'
        )

        self.db.add(medicine)
        self.db.flush()
        return medicine

    def get_medicine(self, medicine_id: int) -> Optional[Medicine]:
        return self.db.query(Medicine).filter(Medicine.id == medicine_id).first()

    def find_medicine(self, name: str, strength: Optional[str] = None) -> Optional[Medicine]:
        """Case-insensitive lookup by name (and strength, when given)"""
        query = self.db.query(Medicine).filter(func.lower(Medicine.name) == name.strip().lower())
        if strength:
            query = query.filter(func.lower(Medicine.strength) == strength.strip().lower())
        return query.order_by(Medicine.id).first()

    def get_medicines(self, category: Optional[str] = None) -> List[Medicine]:
        query = self.db.query(Medicine)
        if category:
            query = query.filter(Medicine.category == category)
        return query.order_by(Medicine.name, Medicine.id).all()

    # ========== INVENTORY ITEMS ==========

    def create_item(self, item_data: Dict[str, Any], clinic_id: int) -> InventoryItem:
        """Register a batch in a clinic's inventory"""
        item = InventoryItem(
            clinic_id=clinic_id,
            medicine_id=item_data['medicine_id'],
            batch_number=item_data['batch_number'],
            quantity=item_data['quantity'],
            unit=item_data.get('unit') or 'tablets',
            expiry_date=item_data['expiry_date'],
            status=item_data['status'],
            added_date=datetime.now()
        )

        self.db.add(item)
        self.db.flush()
        return item

    def get_item(self, item_id: int, for_update: bool = False) -> Optional[InventoryItem]:
        query = self.db.query(InventoryItem).filter(InventoryItem.id == item_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_items(self, clinic_id: Optional[int] = None, status: Optional[str] = None) -> List[InventoryItem]:
        query = self.db.query(InventoryItem)
        if clinic_id is not None:
            query = query.filter(InventoryItem.clinic_id == clinic_id)
        if status:
            query = query.filter(InventoryItem.status == status)
        return query.order_by(InventoryItem.id).all()

    def count_items(self, clinic_id: int, status: Optional[str] = None) -> int:
        conditions = [InventoryItem.clinic_id == clinic_id]
        if status:
            conditions.append(InventoryItem.status == status)
        return self.db.query(func.count(InventoryItem.id)).filter(and_(*conditions)).scalar() or 0
