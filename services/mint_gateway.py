"""
Signer service client

Minting, delegated-mint signatures, transaction receipts and ENS lookups
are served by the signer service that holds the POAP admin keys. This
module only speaks its JSON API.
"""
import logging
from typing import NamedTuple, Optional

import requests

from services.errors import GatewayError

logger = logging.getLogger(__name__)


class TxHandle(NamedTuple):
    hash: str
    signer: str


class MintGateway:

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Signer service call {method} {path} failed: {str(e)}")
            raise GatewayError(str(e)) from e
        except ValueError as e:
            logger.error(f"Signer service returned invalid JSON for {method} {path}")
            raise GatewayError("Invalid response from signer service") from e

        if not isinstance(data, dict):
            logger.error(f"Signer service returned a non-object body for {method} {path}")
            raise GatewayError("Invalid response from signer service")
        return data

    def mint_direct(self, event_id: int, address: str) -> Optional[TxHandle]:
        """Submit a mintToken transaction. Returns None when no hash comes back"""
        data = self._request("POST", "/mint", json={"event_id": event_id, "address": address})
        if not data.get("hash"):
            return None
        return TxHandle(hash=data["hash"], signer=data.get("from"))

    def sign_delegated(self, event_id: int, address: str) -> str:
        """Authorization for a third party to mint (event_id, address) later"""
        data = self._request("POST", "/sign-delegated", json={"event_id": event_id, "address": address.lower()})
        signature = data.get("signature")
        if not signature:
            raise GatewayError("Signer service returned no signature")
        return signature

    def transaction_status(self, tx_hash: str) -> Optional[str]:
        data = self._request("GET", f"/transactions/{tx_hash}")
        return data.get("status")

    def resolve_ens(self, name: str) -> Optional[str]:
        data = self._request("GET", f"/ens/{name}")
        return data.get("address")
