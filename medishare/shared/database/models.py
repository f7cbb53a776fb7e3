# medishare/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, Text,
    ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship
from datetime import datetime

from medishare.config.database import Base
from medishare.shared.schemas.enums import (
    InventoryStatusEnum, SurplusStatusEnum, RequestStatusEnum,
    TransferStatusEnum, MedicinePriorityEnum
)

# =====================================================
# TIMESTAMP MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at / updated_at bookkeeping columns"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# CLINICS & CATALOGUE
# =====================================================

class Clinic(Base, TimestampMixin):
    """Clinic taking part in the sharing network"""
    __tablename__ = "clinics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)

    # Location
    location = Column(String(255))
    district = Column(String(255))
    state = Column(String(255))

    # Contact
    contact_person = Column(String(255))
    phone = Column(String(50))
    email = Column(String(255), index=True)

    # Relationships
    inventory_items = relationship("InventoryItem", back_populates="clinic")
    surplus_postings = relationship("SurplusPosting", back_populates="clinic")
    medicine_requests = relationship("MedicineRequest", back_populates="clinic")


class Medicine(Base, TimestampMixin):
    """Catalogue entry, created on demand from inventory entry"""
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    generic_name = Column(String(255))
    category = Column(String(100))
    strength = Column(String(50))
    manufacturer = Column(String(255))
    priority = Column(String(20), nullable=False, default=MedicinePriorityEnum.STANDARD.value)


# =====================================================
# INVENTORY
# =====================================================

class InventoryItem(Base, TimestampMixin):
    """Batch of one medicine held by one clinic"""
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    batch_number = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    unit = Column(String(50), nullable=False, default="tablets")
    expiry_date = Column(Date, nullable=False)
    status = Column(String(50), nullable=False, default=InventoryStatusEnum.IN_STOCK.value)
    added_date = Column(DateTime, nullable=False, default=datetime.now)

    # Relationships
    clinic = relationship("Clinic", back_populates="inventory_items")
    medicine = relationship("Medicine")


# =====================================================
# SURPLUS & SHORTAGES
# =====================================================

class SurplusPosting(Base, TimestampMixin):
    """Offer to share part of an inventory item"""
    __tablename__ = "surplus_postings"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_surplus_postings_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    reason = Column(String(50), nullable=False)
    status = Column(String(50), nullable=False, default=SurplusStatusEnum.AVAILABLE.value, index=True)
    posted_date = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(Text)

    # Relationships
    clinic = relationship("Clinic", back_populates="surplus_postings")
    inventory_item = relationship("InventoryItem")


class MedicineRequest(Base, TimestampMixin):
    """Declared shortage of a medicine at one clinic"""
    __tablename__ = "medicine_requests"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_medicine_requests_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit = Column(String(50), nullable=False, default="tablets")
    urgency = Column(String(20), nullable=False)
    status = Column(String(50), nullable=False, default=RequestStatusEnum.OPEN.value, index=True)
    requested_date = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(Text)

    # Relationships
    clinic = relationship("Clinic", back_populates="medicine_requests")
    medicine = relationship("Medicine")


# =====================================================
# TRANSFERS
# =====================================================

class Transfer(Base, TimestampMixin):
    """Agreed movement of stock from one clinic to another"""
    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transfers_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    surplus_posting_id = Column(Integer, ForeignKey("surplus_postings.id"), index=True)
    request_id = Column(Integer, ForeignKey("medicine_requests.id"), index=True)
    from_clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    to_clinic_id = Column(Integer, ForeignKey("clinics.id"), nullable=False, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    status = Column(String(50), nullable=False, default=TransferStatusEnum.PENDING.value, index=True)
    requested_date = Column(DateTime, nullable=False)
    approved_date = Column(DateTime)
    completed_date = Column(DateTime)
    notes = Column(Text)

    # Relationships
    surplus_posting = relationship("SurplusPosting")
    request = relationship("MedicineRequest")
    from_clinic = relationship("Clinic", foreign_keys=[from_clinic_id])
    to_clinic = relationship("Clinic", foreign_keys=[to_clinic_id])
    inventory_item = relationship("InventoryItem")
