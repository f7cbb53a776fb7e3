# medishare/modules/clinics/repository.py
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional

from medishare.shared.database.models import Clinic

class ClinicsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_clinic(self, clinic_data: Dict[str, Any]) -> Clinic:
        """Register a new clinic"""
        clinic = Clinic(
            name=clinic_data['name'],
            type=clinic_data['type'],
            location=clinic_data.get('location'),
            district=clinic_data.get('district'),
            state=clinic_data.get('state'),
            contact_person=clinic_data.get('contact_person'),
            phone=clinic_data.get('phone'),
            email=clinic_data.get('email')
        )

        self.db.add(clinic)
        self.db.flush()
        return clinic

    def get_by_id(self, clinic_id: int) -> Optional[Clinic]:
        return self.db.query(Clinic).filter(Clinic.id == clinic_id).first()

    def get_all(self, state: Optional[str] = None) -> List[Clinic]:
        """All clinics, optionally restricted to one state"""
        query = self.db.query(Clinic)
        if state:
            query = query.filter(Clinic.state == state)
        return query.order_by(Clinic.id).all()
