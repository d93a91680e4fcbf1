from sqlalchemy import Column, String, DateTime, Boolean, Integer
from datetime import datetime
from database.connection import Base


class EventTemplate(Base):
    """Presentation template rendered on the claim page of an event"""
    __tablename__ = "event_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    title_image = Column(String, nullable=True)
    title_link = Column(String, nullable=True)
    header_color = Column(String, nullable=True)
    main_color = Column(String, nullable=True)
    footer_color = Column(String, nullable=True)
    footer_icon = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_date = Column(DateTime, default=datetime.utcnow)
