from sqlalchemy import Column, String, DateTime, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from database.connection import Base


class Event(Base):
    """
    Event model - a POAP event whose token is minted on claim

    Events created by an administrator (from_admin) can't be assigned
    to QR codes by event hosts.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fancy_id = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    from_admin = Column(Boolean, default=False, nullable=False)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    event_template_id = Column(Integer, ForeignKey("event_templates.id"), nullable=True)
    created_date = Column(DateTime, default=datetime.utcnow)

    event_template = relationship("EventTemplate")
    qr_claims = relationship("QrClaim", back_populates="event")

    def __repr__(self):
        return f"<Event(fancy_id={self.fancy_id}, from_admin={self.from_admin})>"
