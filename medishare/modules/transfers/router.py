# medishare/modules/transfers/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from medishare.config.database import get_db
from medishare.shared.schemas.enums import TransferStatusEnum
from .service import TransfersService
from .schemas import (
    TransferProposal, TransferRejection, TransferResponse,
    TransferActionResponse, ClinicTransfersResponse
)

router = APIRouter()


def _action_response(transfer, message: str) -> TransferActionResponse:
    return TransferActionResponse(
        success=True,
        message=message,
        transfer=TransferResponse.model_validate(transfer),
        next_step=TransfersService.next_step(transfer)
    )


@router.post("", response_model=TransferActionResponse, status_code=201)
async def propose_transfer(
    proposal: TransferProposal,
    db: Session = Depends(get_db)
):
    """
    Start a transfer from a match

    **Effects:**
    - Transfer created as Pending with quantity = min(surplus, requested)
    - Surplus posting → Reserved
    - Request → Matched

    **Errors:**
    - 404 if the posting, request or its inventory item does not exist
    - 409 if the posting is not Available or the request is not Open
    - 422 if the medicines do not match
    """
    service = TransfersService(db)
    transfer = await service.propose_transfer(proposal.surplus_posting_id, proposal.request_id, proposal.notes)
    return _action_response(transfer, "Transfer request initiated")

@router.get("/clinic/{clinic_id}", response_model=ClinicTransfersResponse)
async def get_clinic_transfers(
    clinic_id: int,
    status: Optional[TransferStatusEnum] = Query(None, description="Only transfers in this status"),
    db: Session = Depends(get_db)
):
    """Incoming and outgoing transfers of a clinic"""
    service = TransfersService(db)
    incoming, outgoing = await service.get_clinic_transfers(clinic_id, status)
    return ClinicTransfersResponse(
        success=True,
        message=f"{len(incoming)} incoming, {len(outgoing)} outgoing",
        clinic_id=clinic_id,
        incoming=[TransferResponse.model_validate(t) for t in incoming],
        outgoing=[TransferResponse.model_validate(t) for t in outgoing]
    )

@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(transfer_id: int, db: Session = Depends(get_db)):
    service = TransfersService(db)
    return await service.get_transfer(transfer_id)

@router.post("/{transfer_id}/approve", response_model=TransferActionResponse)
async def approve_transfer(transfer_id: int, db: Session = Depends(get_db)):
    """Pending → Approved"""
    service = TransfersService(db)
    transfer = await service.approve(transfer_id)
    return _action_response(transfer, "Transfer approved")

@router.post("/{transfer_id}/reject", response_model=TransferActionResponse)
async def reject_transfer(
    transfer_id: int,
    rejection: Optional[TransferRejection] = None,
    db: Session = Depends(get_db)
):
    """
    Pending or Approved → Rejected

    The surplus posting returns to Available and the request to Open.
    """
    service = TransfersService(db)
    transfer = await service.reject(transfer_id, rejection.reason if rejection else None)
    return _action_response(transfer, "Transfer rejected")

@router.post("/{transfer_id}/in-transit", response_model=TransferActionResponse)
async def mark_transfer_in_transit(transfer_id: int, db: Session = Depends(get_db)):
    """Approved → In Transit (optional step before completing)"""
    service = TransfersService(db)
    transfer = await service.mark_in_transit(transfer_id)
    return _action_response(transfer, "Transfer marked as In Transit")

@router.post("/{transfer_id}/complete", response_model=TransferActionResponse)
async def complete_transfer(transfer_id: int, db: Session = Depends(get_db)):
    """
    Approved or In Transit → Completed

    **Effects:**
    - Surplus posting → Transferred
    - Request → Fulfilled
    - Source inventory item quantity reduced by the transfer quantity

    Returns 422 when the inventory item no longer holds enough stock.
    """
    service = TransfersService(db)
    transfer = await service.complete(transfer_id)
    return _action_response(transfer, "Transfer completed - inventory updated")
