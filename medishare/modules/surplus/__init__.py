# medishare/modules/surplus/__init__.py
"""
Surplus module - postings of stock a clinic can share

Status moves Available -> Reserved -> Transferred through transfers, or
Available -> Cancelled on explicit withdrawal.
"""

from .router import router
from .service import SurplusService
from .repository import SurplusRepository

__all__ = [
    "router",
    "SurplusService",
    "SurplusRepository"
]
