"""
Assignment of QR codes to events

Administrators assign any code. Event hosts only assign codes of the
rolls they own, and never to events created by an administrator.
Range and id assignment reject the whole request when any code is
already claimed; hash-list assignment skips claimed codes and reports
them.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from crud.qr_claim import QrClaimRepository
from models.event import Event
from services.errors import BadRequest, Conflict, Forbidden, NotFound

logger = logging.getLogger(__name__)


@dataclass
class Actor:
    """Resolved caller of an assignment: an administrator or a host with rolls"""
    is_admin: bool
    event_host_id: Optional[int] = None
    roll_ids: List[int] = field(default_factory=list)

    @property
    def label(self) -> str:
        return "admin" if self.is_admin else f"host {self.event_host_id}"


@dataclass
class ListAssignResult:
    assigned_count: int
    already_claimed_hashes: List[str]


class AssignmentEngine:

    def __init__(self, repository: QrClaimRepository):
        self.repository = repository

    def _check_rolls(self, actor: Actor) -> None:
        if not actor.is_admin and not actor.roll_ids:
            raise NotFound("You dont have any QR code batch assigned")

    def _check_event(self, event_id: Optional[int], actor: Actor) -> Optional[Event]:
        if event_id is None:
            return None
        event = self.repository.get_event(event_id)
        if not event:
            raise BadRequest("Event not found")
        if not actor.is_admin and event.from_admin:
            raise Forbidden("You can not assign an event that was created by an administrator")
        return event

    def assign_by_range(self, numeric_min: int, numeric_max: int, event_id: Optional[int], actor: Actor) -> int:
        if numeric_min <= 0 or numeric_max <= 0:
            raise BadRequest("Range numbers must be greater than 0")
        if numeric_min > numeric_max:
            raise BadRequest("Range From number should be lower or equal than To")

        self._check_rolls(actor)
        if not actor.is_admin:
            not_owned = self.repository.not_owned_in_range(numeric_min, numeric_max, actor.roll_ids)
            if not_owned:
                raise Forbidden("You can't edit codes that were not assigned to your user")

        self._check_event(event_id, actor)

        claimed = self.repository.claimed_hashes_in_range(numeric_min, numeric_max)
        if claimed:
            raise Conflict("Some QR codes were already claimed: " + ",".join(claimed), qr_hashes=claimed)

        updated = self.repository.set_event_on_range(numeric_min, numeric_max, event_id)
        logger.info(f"{actor.label} assigned event {event_id} to {updated} codes in range {numeric_min}-{numeric_max}")
        return updated

    def assign_by_ids(self, ids: List[int], event_id: Optional[int], actor: Actor) -> int:
        """Same rules as the range assignment, over surrogate ids"""
        self._check_rolls(actor)
        if not actor.is_admin:
            not_owned = self.repository.not_owned_in_ids(ids, actor.roll_ids)
            if not_owned:
                raise Forbidden("You can not edit codes that were not assigned to your user")

        self._check_event(event_id, actor)

        claimed = self.repository.claimed_hashes_in_ids(ids)
        if claimed:
            raise Conflict("Some QR codes were already claimed: " + ",".join(claimed), qr_hashes=claimed)

        updated = self.repository.set_event_on_ids(ids, event_id)
        logger.info(f"{actor.label} assigned event {event_id} to {updated} codes by id")
        return updated

    def assign_by_hash_list(self, qr_hashes: List[str], event_id: Optional[int]) -> ListAssignResult:
        """Assign unclaimed codes; claimed ones are left untouched and reported"""
        self._check_event(event_id, Actor(is_admin=True))

        already_claimed = self.repository.claimed_hashes_in_list(qr_hashes)
        assigned = self.repository.set_event_on_unclaimed_hashes(qr_hashes, event_id)
        if already_claimed:
            logger.info(f"Skipped {len(already_claimed)} claimed codes while assigning event {event_id}")

        return ListAssignResult(assigned_count=assigned, already_claimed_hashes=already_claimed)
