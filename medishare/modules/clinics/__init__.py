# medishare/modules/clinics/__init__.py
"""
Clinics module - registration, lookup and dashboard counters

Architecture:
- router.py: Clinic endpoints
- service.py: Registration and dashboard logic
- repository.py: Clinic data access
- schemas.py: Request/response models
"""

from .router import router
from .service import ClinicsService
from .repository import ClinicsRepository

__all__ = [
    "router",
    "ClinicsService",
    "ClinicsRepository"
]
