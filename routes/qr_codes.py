from fastapi import APIRouter, Depends, Response
from typing import Optional
import base64
import io
import qrcode

import config
from crud.qr_claim import QrClaimRepository
from models.admin_user import AdminUser
from routes.admin import get_current_admin, get_optional_admin
from schemas.qr_claim import (
    IdsAssignRequest,
    ListAssignRequest,
    ListAssignResponse,
    ListCreateRequest,
    ListCreateResponse,
    PaginatedQrCodes,
    QrCodeListItem,
    RangeAssignRequest,
)
from services.assignment import Actor, AssignmentEngine
from services.bulk_creator import BulkCreator
from services.errors import BadRequest, NotFound
from utils.dependencies import get_assignment_engine, get_bulk_creator, get_repository

router = APIRouter()


def resolve_actor(admin: Optional[AdminUser], passphrase: Optional[str], repository: QrClaimRepository) -> Actor:
    """
    Administrators act without restrictions; anybody else must present an
    event host passphrase and is limited to the host's rolls
    """
    if admin:
        return Actor(is_admin=True)

    if not passphrase:
        raise BadRequest("you need to send a passphrase")

    host = repository.get_host_by_passphrase(passphrase)
    if not host:
        raise NotFound("You are not registered as an event host")

    return Actor(is_admin=False, event_host_id=host.id, roll_ids=repository.get_host_roll_ids(host.id))


@router.get("/qr-code", response_model=PaginatedQrCodes)
def list_qr_codes(
    limit: int = 10,
    offset: int = 0,
    event_id: Optional[int] = None,
    qr_roll_id: Optional[int] = None,
    claimed: Optional[bool] = None,
    scanned: Optional[bool] = None,
    passphrase: Optional[str] = None,
    repository: QrClaimRepository = Depends(get_repository),
    admin: Optional[AdminUser] = Depends(get_optional_admin)
):
    """
    List paginated QR codes, filtered by event, roll, claimed and scanned
    Event hosts only see their first roll
    """
    actor = resolve_actor(admin, passphrase, repository)
    if not actor.is_admin:
        # TODO: list every roll of the host once the console can page across rolls
        if not actor.roll_ids:
            raise NotFound("You dont have any QR codes assigned")
        qr_roll_id = actor.roll_ids[0]

    if event_id is not None and not repository.get_event(event_id):
        raise BadRequest("event does not exist")

    qr_claims = repository.paginate(limit, offset, event_id, qr_roll_id, claimed, scanned)
    total = repository.count(event_id, qr_roll_id, claimed, scanned)

    return PaginatedQrCodes(
        limit=limit,
        offset=offset,
        total=total,
        qr_claims=[QrCodeListItem.model_validate(claim) for claim in qr_claims]
    )


@router.put("/qr-code/range-assign", status_code=204)
def range_assign(
    body: RangeAssignRequest,
    engine: AssignmentEngine = Depends(get_assignment_engine),
    admin: Optional[AdminUser] = Depends(get_optional_admin)
):
    """Assign an event to every code whose numeric id is in [numeric_id_min, numeric_id_max]"""
    actor = resolve_actor(admin, body.passphrase, engine.repository)
    engine.assign_by_range(body.numeric_id_min, body.numeric_id_max, body.event_id, actor)
    return Response(status_code=204)


@router.put("/qr-code/update", status_code=204)
def ids_assign(
    body: IdsAssignRequest,
    engine: AssignmentEngine = Depends(get_assignment_engine),
    admin: Optional[AdminUser] = Depends(get_optional_admin)
):
    """Assign an event to several codes selected by id"""
    actor = resolve_actor(admin, body.passphrase, engine.repository)
    engine.assign_by_ids(body.qr_code_ids, body.event_id, actor)
    return Response(status_code=204)


@router.put("/qr-code/list-assign", response_model=ListAssignResponse)
def list_assign(
    body: ListAssignRequest,
    engine: AssignmentEngine = Depends(get_assignment_engine),
    admin: AdminUser = Depends(get_current_admin)
):
    """
    Assign an event to a list of QR hashes
    Claimed codes are skipped and returned in already_claimed_hashes
    """
    result = engine.assign_by_hash_list(body.qr_code_hashes, body.event_id)
    return ListAssignResponse(
        assigned_count=result.assigned_count,
        already_claimed_hashes=result.already_claimed_hashes
    )


@router.post("/qr-code/list-create", response_model=ListCreateResponse)
def list_create(
    body: ListCreateRequest,
    creator: BulkCreator = Depends(get_bulk_creator),
    admin: AdminUser = Depends(get_current_admin)
):
    """Create QR codes from a list of hashes, optionally with numeric ids and an event"""
    result = creator.create_many(
        body.qr_list,
        numeric_ids=body.numeric_list,
        event_id=body.event_id,
        delegated_mint=body.delegated_mint
    )
    return ListCreateResponse(
        created=result.created,
        existing_hashes=result.existing_hashes,
        existing_numeric_ids=result.existing_numeric_ids
    )


@router.get("/qr-code/{qr_hash}/image")
def qr_code_image(
    qr_hash: str,
    repository: QrClaimRepository = Depends(get_repository),
    admin: AdminUser = Depends(get_current_admin)
):
    """PNG (data URI) of the claim link printed on the code"""
    if not repository.get_by_hash(qr_hash):
        raise NotFound("Qr Claim not found")

    claim_url = f"{config.CLAIM_BASE_URL}{qr_hash}"

    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(claim_url)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format='PNG')
    qr_base64 = base64.b64encode(buffer.getvalue()).decode()

    return {
        "qr_hash": qr_hash,
        "claim_url": claim_url,
        "qr_code": f"data:image/png;base64,{qr_base64}"
    }
