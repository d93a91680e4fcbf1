from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship
from datetime import datetime
from database.connection import Base


class EventHost(Base):
    """
    EventHost model - a person allowed to manage the QR rolls handed to them

    Hosts without an account authenticate with their passphrase.
    """
    __tablename__ = "event_hosts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=True, index=True)
    passphrase = Column(String, unique=True, nullable=False, index=True)
    created_date = Column(DateTime, default=datetime.utcnow)

    qr_rolls = relationship("QrRoll", back_populates="event_host")

    def __repr__(self):
        return f"<EventHost(id={self.id}, user_id={self.user_id})>"
