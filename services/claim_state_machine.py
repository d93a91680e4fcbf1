"""
QR claim state machine

Unassigned -> Assigned -> Claimed. The claimed flag is set with a
conditional update before any call to the signer service; if a later step
fails, the flag is reset on the same code (best effort). A failed reset
leaves the code claimed without a mint artifact and needs manual
reconciliation.
"""
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from crud.qr_claim import QrClaimRepository
from models.qr_claim import QrClaim
from schemas.event import EventResponse, EventTemplateResponse
from schemas.qr_claim import ClaimView
from services.address_resolver import AddressResolver
from services.errors import BadRequest, Conflict, GatewayError, Internal, NotFound
from services.mint_gateway import MintGateway
from services.secret_verifier import SecretVerifier
from services.transaction_status import TransactionStatusSource

logger = logging.getLogger(__name__)

CLAIM_NOT_FOUND = "Qr Claim not found"


class ClaimStateMachine:

    def __init__(
        self,
        repository: QrClaimRepository,
        verifier: SecretVerifier,
        gateway: MintGateway,
        resolver: AddressResolver,
        tx_status: TransactionStatusSource,
        schedule: Optional[Callable[..., None]] = None,
    ):
        self.repository = repository
        self.verifier = verifier
        self.gateway = gateway
        self.resolver = resolver
        self.tx_status = tx_status
        # Called with (tx_hash) after a direct mint, for the receipt refresh
        self.schedule = schedule

    def _view(self, claim: QrClaim) -> ClaimView:
        return ClaimView.model_validate(claim)

    def _safe_tx_status(self, tx_hash: Optional[str]) -> Optional[str]:
        try:
            return self.tx_status.status_of(tx_hash)
        except SQLAlchemyError:
            logger.warning(f"Could not read status of transaction {tx_hash}")
            return None

    def _rollback(self, qr_hash: str) -> None:
        try:
            self.repository.unmark_claimed(qr_hash)
            logger.info(f"Claim on {qr_hash} rolled back")
        except SQLAlchemyError:
            self.repository.db.rollback()
            logger.error(f"Rollback failed, {qr_hash} is claimed without a mint and needs manual reconciliation")

    def lookup(self, qr_hash: str) -> ClaimView:
        """Status of a code, with the secret required to claim it"""
        if not qr_hash:
            raise NotFound("Please send qr_hash as querystring parameter")

        claim = self.repository.get_by_hash(qr_hash)
        if not claim:
            self.verifier.penalize()
            raise NotFound(CLAIM_NOT_FOUND)

        event = self.repository.get_event(claim.event_id)
        if not event:
            raise Internal("Qr Claim does not have any event")

        if not claim.scanned:
            self.repository.mark_scanned(qr_hash)

        view = self._view(claim)
        view.event = EventResponse.model_validate(event)
        template = self.repository.get_event_template(event.event_template_id)
        if template:
            view.event_template = EventTemplateResponse.model_validate(template)
        view.secret = self.verifier.derive_secret(qr_hash)
        view.tx_status = self._safe_tx_status(claim.tx_hash)
        return view

    def claim(self, qr_hash: str, address: str, secret: str, delegated: bool = False) -> ClaimView:
        if not self.verifier.verify(qr_hash, secret):
            self.verifier.penalize()
            raise NotFound(CLAIM_NOT_FOUND)

        claim = self.repository.get_by_hash(qr_hash)
        if not claim:
            self.verifier.penalize()
            raise NotFound(CLAIM_NOT_FOUND)

        if claim.claimed:
            raise Conflict("QR is already Claimed")

        try:
            won = self.repository.atomic_mark_claimed(qr_hash)
        except SQLAlchemyError:
            self.repository.db.rollback()
            logger.exception(f"Could not mark {qr_hash} as claimed")
            raise Internal("There was a problem updating claim information")
        if not won:
            raise Conflict("QR is already Claimed")

        event = self.repository.get_event(claim.event_id)
        if not event:
            self._rollback(qr_hash)
            raise Internal("QR Claim is not assigned to an event")

        beneficiary = self.resolver.normalize(address)
        if not beneficiary:
            self._rollback(qr_hash)
            raise BadRequest("Address is not valid")

        if self.repository.address_has_claim(event.id, beneficiary, qr_hash):
            self._rollback(qr_hash)
            raise BadRequest("Address already claimed a code for this event")

        if claim.delegated_mint or delegated:
            try:
                signed_message = self.gateway.sign_delegated(event.id, beneficiary)
            except GatewayError:
                self._rollback(qr_hash)
                raise Internal("There was a problem signing the delegated mint")

            try:
                self.repository.save_delegated_claim(qr_hash, beneficiary, address, signed_message)
            except SQLAlchemyError:
                self.repository.db.rollback()
                logger.exception(f"Saving the delegated mint on {qr_hash} failed")
                self._rollback(qr_hash)
                raise Internal("There was a problem saving the delegated mint")

            logger.info(f"Code {qr_hash} claimed by {beneficiary} with delegated mint for event {event.id}")
        else:
            try:
                tx = self.gateway.mint_direct(event.id, beneficiary)
            except GatewayError:
                tx = None
            if not tx or not tx.hash:
                self._rollback(qr_hash)
                raise Internal("There was a problem in token mint")

            try:
                self.repository.save_minted_claim(qr_hash, beneficiary, address, tx.hash, tx.signer)
                self.repository.record_transaction(tx.hash, tx.signer, event.id, beneficiary)
            except SQLAlchemyError:
                self.repository.db.rollback()
                logger.exception(f"Token minted in {tx.hash} but saving it on {qr_hash} failed")
                raise Internal("There was a problem saving tx_hash")

            logger.info(f"Code {qr_hash} claimed by {beneficiary}, mint tx {tx.hash}")
            if self.schedule:
                self.schedule(tx.hash)

        claim = self.repository.get_by_hash(qr_hash)
        view = self._view(claim)
        view.event = EventResponse.model_validate(event)
        view.tx_status = self._safe_tx_status(claim.tx_hash)
        return view
