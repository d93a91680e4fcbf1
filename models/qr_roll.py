from sqlalchemy import Column, DateTime, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from database.connection import Base


class QrRoll(Base):
    """A printed batch of QR codes handed to one event host"""
    __tablename__ = "qr_rolls"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_host_id = Column(Integer, ForeignKey("event_hosts.id"), nullable=False)
    is_active = Column(Boolean, default=True)
    created_date = Column(DateTime, default=datetime.utcnow)

    event_host = relationship("EventHost", back_populates="qr_rolls")
