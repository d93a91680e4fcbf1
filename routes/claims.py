from fastapi import APIRouter, Depends

from schemas.qr_claim import ClaimRequest, ClaimView
from services.claim_state_machine import ClaimStateMachine
from utils.dependencies import get_claim_state_machine

router = APIRouter()


@router.get("/actions/claim-qr", response_model=ClaimView)
def get_claim_status(qr_hash: str = "", machine: ClaimStateMachine = Depends(get_claim_state_machine)):
    """
    Status of a QR code claim

    Also returns the secret that must be sent back to claim the code.
    """
    return machine.lookup(qr_hash)


@router.post("/actions/claim-qr", response_model=ClaimView)
def claim_qr(body: ClaimRequest, machine: ClaimStateMachine = Depends(get_claim_state_machine)):
    """Mint (or sign a delegated mint of) the event token for the given address"""
    return machine.claim(body.qr_hash, body.address, body.secret, delegated=body.delegated)
