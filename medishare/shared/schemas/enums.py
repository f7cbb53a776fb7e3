# medishare/shared/schemas/enums.py

"""
Status and classification vocabularies shared by models, schemas and services
"""

from enum import Enum


class InventoryStatusEnum(str, Enum):
    """Derived classification of an inventory item"""
    IN_STOCK = "In Stock"
    LOW_STOCK = "Low Stock"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class SurplusStatusEnum(str, Enum):
    AVAILABLE = "Available"
    RESERVED = "Reserved"
    TRANSFERRED = "Transferred"
    CANCELLED = "Cancelled"


class SurplusReasonEnum(str, Enum):
    NEAR_EXPIRY = "Near Expiry"
    OVERSTOCKED = "Overstocked"
    PROGRAM_ENDED = "Program Ended"
    OTHER = "Other"


class RequestStatusEnum(str, Enum):
    OPEN = "Open"
    MATCHED = "Matched"
    FULFILLED = "Fulfilled"
    CANCELLED = "Cancelled"


class UrgencyEnum(str, Enum):
    """Requester-declared priority of a shortage"""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MedicinePriorityEnum(str, Enum):
    CRITICAL = "Critical"
    ESSENTIAL = "Essential"
    STANDARD = "Standard"


class TransferStatusEnum(str, Enum):
    """Transfer lifecycle: Pending -> Approved -> In Transit -> Completed, or Rejected"""
    PENDING = "Pending"
    APPROVED = "Approved"
    IN_TRANSIT = "In Transit"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


TERMINAL_TRANSFER_STATUSES = frozenset({
    TransferStatusEnum.COMPLETED.value,
    TransferStatusEnum.REJECTED.value,
})
