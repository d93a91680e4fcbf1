"""
Transaction status

Statuses are read from the local transactions table. A background task
asks the signer service for the receipt after each mint and stores the
result, so reads never wait on the chain.
"""
import logging
from typing import Optional

from crud.qr_claim import QrClaimRepository
from database.connection import SessionLocal
from models.transaction import TransactionStatus
from services.mint_gateway import MintGateway

logger = logging.getLogger(__name__)


class TransactionStatusSource:

    def __init__(self, repository: QrClaimRepository):
        self.repository = repository

    def status_of(self, tx_hash: Optional[str]) -> Optional[str]:
        if not tx_hash:
            return None
        transaction = self.repository.get_transaction(tx_hash)
        if not transaction or transaction.status is None:
            return None
        return transaction.status.value


def refresh_transaction_status(gateway: MintGateway, tx_hash: str, session_factory=SessionLocal) -> None:
    """Store the signer service's view of a transaction in the local table"""
    status = gateway.transaction_status(tx_hash)
    if status not in {s.value for s in TransactionStatus}:
        logger.info(f"Transaction {tx_hash} has no final status yet ({status})")
        return

    db = session_factory()
    try:
        QrClaimRepository(db).set_transaction_status(tx_hash, TransactionStatus(status))
        logger.info(f"Transaction {tx_hash} is {status}")
    finally:
        db.close()
