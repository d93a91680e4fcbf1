from sqlalchemy import Column, String, DateTime, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from database.connection import Base


class QrClaim(Base):
    """
    QrClaim model - one row per printed QR code

    A code is first assigned to an event (event_id) and later claimed by
    an address. Claimed codes hold either a tx_hash (direct mint) or a
    delegated_signed_message (delegated mint).
    """
    __tablename__ = "qr_claims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    qr_hash = Column(String, unique=True, nullable=False, index=True)
    numeric_id = Column(Integer, unique=True, nullable=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=True)
    qr_roll_id = Column(Integer, ForeignKey("qr_rolls.id"), nullable=True)
    beneficiary = Column(String, nullable=True, index=True)
    user_input = Column(String, nullable=True)
    signer = Column(String, nullable=True)
    tx_hash = Column(String, nullable=True)
    claimed = Column(Boolean, default=False, nullable=False)
    claimed_date = Column(DateTime, nullable=True)
    scanned = Column(Boolean, default=False, nullable=False)
    delegated_mint = Column(Boolean, default=False, nullable=False)
    delegated_signed_message = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_date = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="qr_claims")

    def __repr__(self):
        return f"<QrClaim(qr_hash={self.qr_hash}, claimed={self.claimed})>"
