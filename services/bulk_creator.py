import logging
from dataclasses import dataclass
from typing import List, Optional

from crud.qr_claim import QrClaimRepository
from services.errors import BadRequest

logger = logging.getLogger(__name__)


@dataclass
class CreateResult:
    created: int
    existing_hashes: List[str]
    existing_numeric_ids: List[int]


def find_duplicates(values: list) -> list:
    seen = set()
    duplicates = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates


class BulkCreator:
    """
    Provision QR claim rows from printed hash lists

    Codes whose hash or numeric id already exists are skipped and
    reported; internal duplicates reject the whole batch.
    """

    def __init__(self, repository: QrClaimRepository):
        self.repository = repository

    def create_many(
        self,
        qr_hashes: List[str],
        numeric_ids: Optional[List[int]] = None,
        event_id: Optional[int] = None,
        delegated_mint: bool = False,
    ) -> CreateResult:
        if numeric_ids and len(numeric_ids) != len(qr_hashes):
            raise BadRequest("qr_list length is not equal to numeric_list length")

        duplicated_hashes = find_duplicates(qr_hashes)
        if duplicated_hashes:
            raise BadRequest("QR Hash list include duplicated codes: " + ",".join(duplicated_hashes))

        duplicated_ids = find_duplicates(numeric_ids or [])
        if duplicated_ids:
            raise BadRequest("Numeric list include duplicated numbers: " + ",".join(str(i) for i in duplicated_ids))

        if event_id is not None and not self.repository.get_event(event_id):
            raise BadRequest("Event not found")

        existing_hashes = self.repository.existing_hashes(qr_hashes)
        existing_ids = self.repository.existing_numeric_ids(numeric_ids or [])

        skipped_hashes = []
        skipped_ids = []
        rows = []
        for index, qr_hash in enumerate(qr_hashes):
            if qr_hash in existing_hashes:
                skipped_hashes.append(qr_hash)
                continue

            numeric_id = numeric_ids[index] if numeric_ids else None
            if numeric_id is not None and numeric_id in existing_ids:
                skipped_ids.append(numeric_id)
                continue

            rows.append({
                "qr_hash": qr_hash,
                "numeric_id": numeric_id,
                "event_id": event_id,
                "delegated_mint": delegated_mint,
            })

        created = self.repository.create(rows)
        logger.info(f"Created {len(created)} QR codes, skipped {len(skipped_hashes)} hashes and {len(skipped_ids)} numeric ids")

        return CreateResult(
            created=len(created),
            existing_hashes=skipped_hashes,
            existing_numeric_ids=skipped_ids,
        )
