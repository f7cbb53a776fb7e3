# medishare/modules/transfers/service.py

from typing import Callable, Iterable, Optional
from datetime import datetime
from fastapi import HTTPException
from sqlalchemy.orm import Session
import logging

from medishare.core.exceptions import NotFoundError, InvalidStateError, DataIntegrityError
from medishare.shared.database.models import Transfer
from medishare.shared.schemas.enums import (
    TransferStatusEnum, SurplusStatusEnum, RequestStatusEnum, TERMINAL_TRANSFER_STATUSES
)
from medishare.shared.services.inventory_status import InventoryStatusService
from medishare.modules.inventory.repository import InventoryRepository
from medishare.modules.surplus.repository import SurplusRepository
from medishare.modules.medicine_requests.repository import RequestsRepository
from .repository import TransfersRepository

logger = logging.getLogger(__name__)

DEFAULT_PROPOSAL_NOTES = "Transfer requested via matching system"

NEXT_STEPS = {
    TransferStatusEnum.PENDING.value: "Giving clinic reviews and approves the transfer",
    TransferStatusEnum.APPROVED.value: "Giving clinic dispatches the stock, or receiving clinic confirms receipt",
    TransferStatusEnum.IN_TRANSIT.value: "Receiving clinic confirms receipt",
    TransferStatusEnum.COMPLETED.value: "Transfer finished - inventory updated",
    TransferStatusEnum.REJECTED.value: "Surplus and request are open for matching again",
}


class TransfersService:
    """
    Transfer state machine

        Pending -> Approved -> In Transit -> Completed
        Pending | Approved -> Rejected

    In Transit is optional: complete() accepts Approved or In Transit.
    Every operation reads its rows FOR UPDATE and commits once, so the
    transfer, surplus posting, request and inventory item change together or
    not at all.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.now):
        self.db = db
        self.clock = clock
        self.repository = TransfersRepository(db)
        self.surplus_repository = SurplusRepository(db)
        self.requests_repository = RequestsRepository(db)
        self.inventory_repository = InventoryRepository(db)

    async def propose_transfer(
        self,
        surplus_posting_id: int,
        request_id: int,
        notes: Optional[str] = None
    ) -> Transfer:
        """
        Create a Pending transfer from a chosen match

        Reserves the surplus posting and marks the request Matched. The
        quantity is the smaller of what is offered and what is requested.
        """
        try:
            logger.info(f"🤝 Proposing transfer - Surplus: {surplus_posting_id} | Request: {request_id}")

            surplus = self.surplus_repository.get_by_id(surplus_posting_id, for_update=True)
            if not surplus:
                raise NotFoundError(
                    f"Surplus posting {surplus_posting_id} not found",
                    {"surplus_posting_id": surplus_posting_id}
                )

            request = self.requests_repository.get_by_id(request_id, for_update=True)
            if not request:
                raise NotFoundError(f"Request {request_id} not found", {"request_id": request_id})

            if surplus.status != SurplusStatusEnum.AVAILABLE.value:
                raise InvalidStateError(
                    f"Surplus posting {surplus.id} is not Available. Current status: {surplus.status}",
                    {"surplus_posting_id": surplus.id, "status": surplus.status}
                )

            if request.status != RequestStatusEnum.OPEN.value:
                raise InvalidStateError(
                    f"Request {request.id} is not Open. Current status: {request.status}",
                    {"request_id": request.id, "status": request.status}
                )

            item = self.inventory_repository.get_item(surplus.inventory_item_id)
            if not item:
                raise NotFoundError(
                    f"Inventory item {surplus.inventory_item_id} of surplus posting {surplus.id} not found",
                    {"inventory_item_id": surplus.inventory_item_id}
                )

            if item.medicine_id != request.medicine_id:
                raise DataIntegrityError(
                    f"Surplus medicine {item.medicine_id} does not match requested medicine {request.medicine_id}",
                    {"surplus_medicine_id": item.medicine_id, "request_medicine_id": request.medicine_id}
                )

            quantity = min(surplus.quantity, request.quantity)

            transfer = self.repository.create_transfer({
                "surplus_posting_id": surplus.id,
                "request_id": request.id,
                "from_clinic_id": surplus.clinic_id,
                "to_clinic_id": request.clinic_id,
                "inventory_item_id": surplus.inventory_item_id,
                "quantity": quantity,
                "requested_date": self.clock(),
                "notes": notes or DEFAULT_PROPOSAL_NOTES
            })

            surplus.status = SurplusStatusEnum.RESERVED.value
            request.status = RequestStatusEnum.MATCHED.value

            self.db.commit()
            self.db.refresh(transfer)

            logger.info(f"   ✅ Transfer created - ID: {transfer.id}")
            logger.info(f"   Clinic {transfer.from_clinic_id} → Clinic {transfer.to_clinic_id} | Quantity: {quantity}")
            return transfer

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error proposing transfer")
            raise HTTPException(status_code=500, detail=f"Error proposing transfer: {str(e)}")

    async def approve(self, transfer_id: int) -> Transfer:
        """Pending -> Approved. Touches nothing but the transfer."""
        try:
            transfer = self._get_for_transition(
                transfer_id, (TransferStatusEnum.PENDING,), "approve"
            )

            transfer.status = TransferStatusEnum.APPROVED.value
            transfer.approved_date = self.clock()

            self.db.commit()
            self.db.refresh(transfer)

            logger.info(f"✅ Transfer {transfer_id} approved")
            return transfer

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error approving transfer")
            raise HTTPException(status_code=500, detail=f"Error approving transfer: {str(e)}")

    async def reject(self, transfer_id: int, reason: Optional[str] = None) -> Transfer:
        """
        Pending | Approved -> Rejected

        Puts the surplus posting back to Available and the request back to
        Open so both can be matched again. Either may be gone; the transfer
        is rejected regardless.
        """
        try:
            transfer = self._get_for_transition(
                transfer_id, (TransferStatusEnum.PENDING, TransferStatusEnum.APPROVED), "reject"
            )

            transfer.status = TransferStatusEnum.REJECTED.value
            if reason:
                transfer.notes = f"{transfer.notes}\nRejected: {reason}" if transfer.notes else f"Rejected: {reason}"

            if transfer.surplus_posting_id is not None:
                surplus = self.surplus_repository.get_by_id(transfer.surplus_posting_id, for_update=True)
                if surplus:
                    surplus.status = SurplusStatusEnum.AVAILABLE.value
                else:
                    logger.warning(f"   ⚠️ Surplus posting {transfer.surplus_posting_id} no longer exists")

            if transfer.request_id is not None:
                request = self.requests_repository.get_by_id(transfer.request_id, for_update=True)
                if request:
                    request.status = RequestStatusEnum.OPEN.value
                else:
                    logger.warning(f"   ⚠️ Request {transfer.request_id} no longer exists")

            self.db.commit()
            self.db.refresh(transfer)

            logger.info(f"❌ Transfer {transfer_id} rejected - surplus and request reopened")
            return transfer

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error rejecting transfer")
            raise HTTPException(status_code=500, detail=f"Error rejecting transfer: {str(e)}")

    async def mark_in_transit(self, transfer_id: int) -> Transfer:
        """Approved -> In Transit, when the physical handoff is tracked"""
        try:
            transfer = self._get_for_transition(
                transfer_id, (TransferStatusEnum.APPROVED,), "mark in transit"
            )

            transfer.status = TransferStatusEnum.IN_TRANSIT.value

            self.db.commit()
            self.db.refresh(transfer)

            logger.info(f"🚚 Transfer {transfer_id} in transit")
            return transfer

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error dispatching transfer")
            raise HTTPException(status_code=500, detail=f"Error dispatching transfer: {str(e)}")

    async def complete(self, transfer_id: int) -> Transfer:
        """
        Approved | In Transit -> Completed

        Surplus posting -> Transferred, request -> Fulfilled, and the source
        inventory item loses ``transfer.quantity`` units. The item's status is
        reclassified afterwards. Stock that would go negative aborts the
        whole operation with DataIntegrityError.
        """
        try:
            transfer = self._get_for_transition(
                transfer_id, (TransferStatusEnum.APPROVED, TransferStatusEnum.IN_TRANSIT), "complete"
            )

            item = self.inventory_repository.get_item(transfer.inventory_item_id, for_update=True)
            if not item:
                raise DataIntegrityError(
                    f"Inventory item {transfer.inventory_item_id} of transfer {transfer.id} not found",
                    {"transfer_id": transfer.id, "inventory_item_id": transfer.inventory_item_id}
                )

            if item.quantity < transfer.quantity:
                raise DataIntegrityError(
                    f"Insufficient stock to complete transfer {transfer.id}. "
                    f"Available: {item.quantity}, Transfer: {transfer.quantity}",
                    {"transfer_id": transfer.id, "available": item.quantity, "required": transfer.quantity}
                )

            now = self.clock()
            item.quantity -= transfer.quantity
            InventoryStatusService.refresh(item, now)

            if transfer.surplus_posting_id is not None:
                surplus = self.surplus_repository.get_by_id(transfer.surplus_posting_id, for_update=True)
                if surplus:
                    surplus.status = SurplusStatusEnum.TRANSFERRED.value
                else:
                    logger.warning(f"   ⚠️ Surplus posting {transfer.surplus_posting_id} no longer exists")

            if transfer.request_id is not None:
                request = self.requests_repository.get_by_id(transfer.request_id, for_update=True)
                if request:
                    request.status = RequestStatusEnum.FULFILLED.value
                else:
                    logger.warning(f"   ⚠️ Request {transfer.request_id} no longer exists")

            transfer.status = TransferStatusEnum.COMPLETED.value
            transfer.completed_date = now

            self.db.commit()
            self.db.refresh(transfer)

            logger.info(f"🎉 Transfer {transfer_id} completed")
            logger.info(f"   Inventory item {item.id}: -{transfer.quantity} → {item.quantity} ({item.status})")
            return transfer

        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("❌ Error completing transfer")
            raise HTTPException(status_code=500, detail=f"Error completing transfer: {str(e)}")

    async def get_transfer(self, transfer_id: int) -> Transfer:
        transfer = self.repository.get_by_id(transfer_id)
        if not transfer:
            raise NotFoundError(f"Transfer {transfer_id} not found", {"transfer_id": transfer_id})
        return transfer

    async def get_clinic_transfers(self, clinic_id: int, status: Optional[TransferStatusEnum] = None):
        """Incoming and outgoing transfers of a clinic, newest first"""
        status_value = status.value if status else None
        return (
            self.repository.get_incoming(clinic_id, status_value),
            self.repository.get_outgoing(clinic_id, status_value)
        )

    @staticmethod
    def next_step(transfer: Transfer) -> Optional[str]:
        return NEXT_STEPS.get(transfer.status)

    def _get_for_transition(
        self,
        transfer_id: int,
        allowed: Iterable[TransferStatusEnum],
        action: str
    ) -> Transfer:
        transfer = self.repository.get_by_id(transfer_id, for_update=True)
        if not transfer:
            raise NotFoundError(f"Transfer {transfer_id} not found", {"transfer_id": transfer_id})

        if transfer.status in TERMINAL_TRANSFER_STATUSES:
            raise InvalidStateError(
                f"Cannot {action} transfer {transfer_id}. It is already {transfer.status}",
                {"transfer_id": transfer_id, "status": transfer.status}
            )

        allowed_values = [s.value for s in allowed]
        if transfer.status not in allowed_values:
            raise InvalidStateError(
                f"Cannot {action} transfer {transfer_id}. "
                f"Current status: {transfer.status}, expected: {', '.join(allowed_values)}",
                {"transfer_id": transfer_id, "status": transfer.status, "allowed": allowed_values}
            )
        return transfer
