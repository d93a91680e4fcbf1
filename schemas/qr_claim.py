from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from schemas.event import EventResponse, EventTemplateResponse


class QrClaimBase(BaseModel):
    id: int
    qr_hash: str
    numeric_id: Optional[int] = None
    event_id: Optional[int] = None
    qr_roll_id: Optional[int] = None
    tx_hash: Optional[str] = None
    beneficiary: Optional[str] = None
    user_input: Optional[str] = None
    signer: Optional[str] = None
    claimed: bool
    claimed_date: Optional[datetime] = None
    scanned: bool
    delegated_mint: bool
    delegated_signed_message: Optional[str] = None
    is_active: Optional[bool] = True
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClaimView(QrClaimBase):
    """What the claim page sees for one QR code"""
    event: Optional[EventResponse] = None
    event_template: Optional[EventTemplateResponse] = None
    secret: Optional[str] = None
    tx_status: Optional[str] = None


class ClaimRequest(BaseModel):
    qr_hash: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    secret: str
    delegated: bool = False


class QrCodeListItem(QrClaimBase):
    event: Optional[EventResponse] = None


class PaginatedQrCodes(BaseModel):
    limit: int
    offset: int
    total: int
    qr_claims: List[QrCodeListItem]


class RangeAssignRequest(BaseModel):
    numeric_id_min: int
    numeric_id_max: int
    event_id: Optional[int] = None
    passphrase: Optional[str] = None


class ListAssignRequest(BaseModel):
    qr_code_hashes: List[str]
    event_id: Optional[int] = None


class ListAssignResponse(BaseModel):
    success: bool = True
    assigned_count: int
    already_claimed_hashes: List[str]


class IdsAssignRequest(BaseModel):
    qr_code_ids: List[int]
    event_id: Optional[int] = None
    passphrase: Optional[str] = None


class ListCreateRequest(BaseModel):
    qr_list: List[str] = Field(..., min_length=1)
    numeric_list: Optional[List[int]] = None
    event_id: Optional[int] = None
    delegated_mint: bool = False


class ListCreateResponse(BaseModel):
    created: int
    existing_hashes: List[str]
    existing_numeric_ids: List[int]
