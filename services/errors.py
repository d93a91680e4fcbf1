"""
Domain errors raised by the claim services

Each error carries the HTTP status it is rendered with; main.py installs
a handler that turns them into {"detail": ...} responses.
"""
from typing import List, Optional


class ClaimError(Exception):
    status_code = 500

    def __init__(self, detail: str, qr_hashes: Optional[List[str]] = None):
        super().__init__(detail)
        self.detail = detail
        self.qr_hashes = qr_hashes


class NotFound(ClaimError):
    status_code = 404


class BadRequest(ClaimError):
    status_code = 400


class Forbidden(ClaimError):
    status_code = 403


class Conflict(ClaimError):
    status_code = 409


class Internal(ClaimError):
    status_code = 500


class GatewayError(Exception):
    """Raised when the signer service can't be reached or answers with an error"""
