# medishare/modules/transfers/__init__.py
"""
Transfers module - lifecycle of medicine movements between clinics

Flow:
- Propose from a match: transfer Pending, surplus Reserved, request Matched
- Approve, optionally mark In Transit, then complete: surplus Transferred,
  request Fulfilled, source inventory decremented
- Reject from Pending or Approved: surplus Available, request Open again

Architecture:
- router.py: Transfer endpoints
- service.py: State machine and correlated updates
- repository.py: Transfer data access
- schemas.py: Request/response models
"""

from .router import router
from .service import TransfersService
from .repository import TransfersRepository

__all__ = [
    "router",
    "TransfersService",
    "TransfersRepository"
]
