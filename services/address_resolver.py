import logging
import re
from typing import Optional

from services.errors import GatewayError
from services.mint_gateway import MintGateway

logger = logging.getLogger(__name__)

HEX_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


class AddressResolver:
    """Turns what the claimer typed (hex address or ENS name) into a lowercase address"""

    def __init__(self, gateway: MintGateway):
        self.gateway = gateway

    def normalize(self, raw_input: str) -> Optional[str]:
        value = (raw_input or "").strip()
        if HEX_ADDRESS.match(value):
            return value.lower()

        if "." not in value:
            return None

        try:
            resolved = self.gateway.resolve_ens(value)
        except GatewayError:
            logger.warning(f"ENS resolution failed for {value}")
            return None

        if resolved and HEX_ADDRESS.match(resolved):
            return resolved.lower()
        return None
