from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class EventResponse(BaseModel):
    id: int
    fancy_id: str
    name: str
    from_admin: bool
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventTemplateResponse(BaseModel):
    id: int
    name: str
    title_image: Optional[str] = None
    title_link: Optional[str] = None
    header_color: Optional[str] = None
    main_color: Optional[str] = None
    footer_color: Optional[str] = None
    footer_icon: Optional[str] = None
    is_active: bool = True
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True
