# medishare/core/exceptions.py
from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class MediShareError(HTTPException):
    """Base for failures reported by the matching and transfer services"""

    error_code = "MEDISHARE_ERROR"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=self.default_status, detail=detail)
        self.details = details or {}


class NotFoundError(MediShareError):
    """Referenced id is absent from the store"""

    error_code = "NOT_FOUND"
    default_status = status.HTTP_404_NOT_FOUND


class InvalidStateError(MediShareError):
    """Entity is not in a state that allows the requested operation"""

    error_code = "INVALID_STATE"
    default_status = status.HTTP_409_CONFLICT


class DataIntegrityError(MediShareError):
    """Operation would break a quantity or medicine invariant"""

    error_code = "DATA_INTEGRITY"
    default_status = status.HTTP_422_UNPROCESSABLE_ENTITY
