# medishare/modules/medicine_requests/__init__.py
"""
Medicine requests module - shortages declared by clinics

Status moves Open -> Matched -> Fulfilled through transfers, or
Open -> Cancelled on explicit withdrawal.
"""

from .router import router
from .service import RequestsService
from .repository import RequestsRepository

__all__ = [
    "router",
    "RequestsService",
    "RequestsRepository"
]
