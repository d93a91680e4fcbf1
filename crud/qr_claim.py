"""
Persistence for QR claims and the records they reference

All bulk writes are issued as single UPDATE/INSERT statements. The claim
transition is a conditional UPDATE so that concurrent claims on the same
code have exactly one winner, whatever the number of API instances.
"""
import json
from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.event import Event
from models.event_host import EventHost
from models.event_template import EventTemplate
from models.qr_claim import QrClaim
from models.qr_roll import QrRoll
from models.transaction import Transaction, TransactionStatus


class QrClaimRepository:

    def __init__(self, db: Session):
        self.db = db

    # --- Lookups ---------------------------------------------------------

    def get_by_hash(self, qr_hash: str) -> Optional[QrClaim]:
        return self.db.query(QrClaim).filter(QrClaim.qr_hash == qr_hash).first()

    def get_event(self, event_id: Optional[int]) -> Optional[Event]:
        if event_id is None:
            return None
        return self.db.query(Event).filter(Event.id == event_id).first()

    def get_event_template(self, template_id: Optional[int]) -> Optional[EventTemplate]:
        if template_id is None:
            return None
        return self.db.query(EventTemplate).filter(EventTemplate.id == template_id).first()

    def get_host_by_passphrase(self, passphrase: str) -> Optional[EventHost]:
        return self.db.query(EventHost).filter(EventHost.passphrase == passphrase).first()

    def get_host_roll_ids(self, event_host_id: int) -> List[int]:
        rolls = self.db.query(QrRoll.id).filter(
            QrRoll.event_host_id == event_host_id,
            QrRoll.is_active == True
        ).order_by(QrRoll.id).all()
        return [roll.id for roll in rolls]

    # --- Claim transition --------------------------------------------------

    def mark_scanned(self, qr_hash: str) -> None:
        self.db.query(QrClaim).filter(
            QrClaim.qr_hash == qr_hash,
            QrClaim.scanned == False
        ).update({QrClaim.scanned: True}, synchronize_session=False)
        self.db.commit()

    def atomic_mark_claimed(self, qr_hash: str) -> bool:
        """Set claimed=true only if the code is still unclaimed. Returns True for the winner."""
        updated = self.db.query(QrClaim).filter(
            QrClaim.qr_hash == qr_hash,
            QrClaim.claimed == False
        ).update(
            {QrClaim.claimed: True, QrClaim.claimed_date: datetime.utcnow()},
            synchronize_session=False
        )
        self.db.commit()
        return updated == 1

    def unmark_claimed(self, qr_hash: str) -> None:
        self.db.query(QrClaim).filter(QrClaim.qr_hash == qr_hash).update(
            {QrClaim.claimed: False, QrClaim.claimed_date: None},
            synchronize_session=False
        )
        self.db.commit()

    def address_has_claim(self, event_id: int, address: str, exclude_hash: str) -> bool:
        """Whether another claimed code of the event already credits this address"""
        existing = self.db.query(QrClaim.id).filter(
            QrClaim.event_id == event_id,
            QrClaim.claimed == True,
            func.lower(QrClaim.beneficiary) == address.lower(),
            QrClaim.qr_hash != exclude_hash
        ).first()
        return existing is not None

    def save_delegated_claim(self, qr_hash: str, beneficiary: str, user_input: str, signed_message: str) -> None:
        self.db.query(QrClaim).filter(QrClaim.qr_hash == qr_hash).update({
            QrClaim.beneficiary: beneficiary,
            QrClaim.user_input: user_input,
            QrClaim.delegated_mint: True,
            QrClaim.delegated_signed_message: signed_message,
        }, synchronize_session=False)
        self.db.commit()

    def save_minted_claim(self, qr_hash: str, beneficiary: str, user_input: str, tx_hash: str, signer: str) -> None:
        self.db.query(QrClaim).filter(QrClaim.qr_hash == qr_hash).update({
            QrClaim.beneficiary: beneficiary,
            QrClaim.user_input: user_input,
            QrClaim.tx_hash: tx_hash,
            QrClaim.signer: signer,
        }, synchronize_session=False)
        self.db.commit()

    # --- Transactions --------------------------------------------------------

    def record_transaction(self, tx_hash: str, signer: str, event_id: int, address: str) -> Transaction:
        transaction = Transaction(
            tx_hash=tx_hash,
            signer=signer,
            operation="mintToken",
            arguments=json.dumps({"event_id": event_id, "address": address}),
            status=TransactionStatus.PENDING
        )
        self.db.add(transaction)
        self.db.commit()
        self.db.refresh(transaction)
        return transaction

    def get_transaction(self, tx_hash: str) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(Transaction.tx_hash == tx_hash).first()

    def set_transaction_status(self, tx_hash: str, status: TransactionStatus) -> None:
        self.db.query(Transaction).filter(Transaction.tx_hash == tx_hash).update(
            {Transaction.status: status}, synchronize_session=False
        )
        self.db.commit()

    # --- Assignment ----------------------------------------------------------

    def claimed_hashes_in_range(self, numeric_min: int, numeric_max: int) -> List[str]:
        rows = self.db.query(QrClaim.qr_hash).filter(
            QrClaim.numeric_id.between(numeric_min, numeric_max),
            QrClaim.claimed == True
        ).order_by(QrClaim.numeric_id).all()
        return [row.qr_hash for row in rows]

    def not_owned_in_range(self, numeric_min: int, numeric_max: int, roll_ids: List[int]) -> List[str]:
        rows = self.db.query(QrClaim.qr_hash).filter(
            QrClaim.numeric_id.between(numeric_min, numeric_max),
            (QrClaim.qr_roll_id == None) | (QrClaim.qr_roll_id.notin_(roll_ids))
        ).all()
        return [row.qr_hash for row in rows]

    def set_event_on_range(self, numeric_min: int, numeric_max: int, event_id: Optional[int]) -> int:
        updated = self.db.query(QrClaim).filter(
            QrClaim.numeric_id.between(numeric_min, numeric_max)
        ).update({QrClaim.event_id: event_id}, synchronize_session=False)
        self.db.commit()
        return updated

    def claimed_hashes_in_list(self, qr_hashes: List[str]) -> List[str]:
        if not qr_hashes:
            return []
        rows = self.db.query(QrClaim.qr_hash).filter(
            QrClaim.qr_hash.in_(qr_hashes),
            QrClaim.claimed == True
        ).all()
        return [row.qr_hash for row in rows]

    def set_event_on_unclaimed_hashes(self, qr_hashes: List[str], event_id: Optional[int]) -> int:
        if not qr_hashes:
            return 0
        updated = self.db.query(QrClaim).filter(
            QrClaim.qr_hash.in_(qr_hashes),
            QrClaim.claimed == False
        ).update({QrClaim.event_id: event_id}, synchronize_session=False)
        self.db.commit()
        return updated

    def claimed_hashes_in_ids(self, ids: List[int]) -> List[str]:
        if not ids:
            return []
        rows = self.db.query(QrClaim.qr_hash).filter(
            QrClaim.id.in_(ids),
            QrClaim.claimed == True
        ).all()
        return [row.qr_hash for row in rows]

    def not_owned_in_ids(self, ids: List[int], roll_ids: List[int]) -> List[str]:
        if not ids:
            return []
        rows = self.db.query(QrClaim.qr_hash).filter(
            QrClaim.id.in_(ids),
            (QrClaim.qr_roll_id == None) | (QrClaim.qr_roll_id.notin_(roll_ids))
        ).all()
        return [row.qr_hash for row in rows]

    def set_event_on_ids(self, ids: List[int], event_id: Optional[int]) -> int:
        if not ids:
            return 0
        updated = self.db.query(QrClaim).filter(
            QrClaim.id.in_(ids)
        ).update({QrClaim.event_id: event_id}, synchronize_session=False)
        self.db.commit()
        return updated

    # --- Creation --------------------------------------------------------------

    def existing_hashes(self, qr_hashes: List[str]) -> Set[str]:
        if not qr_hashes:
            return set()
        rows = self.db.query(QrClaim.qr_hash).filter(QrClaim.qr_hash.in_(qr_hashes)).all()
        return {row.qr_hash for row in rows}

    def existing_numeric_ids(self, numeric_ids: List[int]) -> Set[int]:
        if not numeric_ids:
            return set()
        rows = self.db.query(QrClaim.numeric_id).filter(QrClaim.numeric_id.in_(numeric_ids)).all()
        return {row.numeric_id for row in rows}

    def create(self, rows: List[dict]) -> List[QrClaim]:
        claims = [QrClaim(**row) for row in rows]
        if claims:
            self.db.add_all(claims)
            self.db.commit()
        return claims

    # --- Listing ---------------------------------------------------------------

    def _filtered(self, event_id, qr_roll_id, claimed, scanned):
        query = self.db.query(QrClaim)
        if event_id is not None:
            query = query.filter(QrClaim.event_id == event_id)
        if qr_roll_id is not None:
            query = query.filter(QrClaim.qr_roll_id == qr_roll_id)
        if claimed is not None:
            query = query.filter(QrClaim.claimed == claimed)
        if scanned is not None:
            query = query.filter(QrClaim.scanned == scanned)
        return query

    def paginate(self, limit: int, offset: int, event_id=None, qr_roll_id=None, claimed=None, scanned=None) -> List[QrClaim]:
        return self._filtered(event_id, qr_roll_id, claimed, scanned).order_by(
            QrClaim.numeric_id, QrClaim.id
        ).offset(offset).limit(limit).all()

    def count(self, event_id=None, qr_roll_id=None, claimed=None, scanned=None) -> int:
        return self._filtered(event_id, qr_roll_id, claimed, scanned).count()
