from sqlalchemy import Column, String, DateTime, Integer, Text, Enum
from datetime import datetime
import enum

from database.connection import Base


class TransactionStatus(str, enum.Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class Transaction(Base):
    """On-chain transaction submitted on behalf of a claim"""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tx_hash = Column(String, unique=True, nullable=False, index=True)
    signer = Column(String, nullable=True)
    operation = Column(String, nullable=False, default="mintToken")
    arguments = Column(Text, nullable=True)
    status = Column(Enum(TransactionStatus), default=TransactionStatus.PENDING)
    created_date = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Transaction(tx_hash={self.tx_hash}, status={self.status})>"
