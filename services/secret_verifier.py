"""
Claim secrets

The status lookup hands out HMAC-SHA256(server_key, qr_hash); the claim
endpoint requires it back. Failed checks are answered only after a fixed
delay to slow down enumeration of codes and secrets.
"""
import hashlib
import hmac
import time


class SecretVerifier:

    def __init__(self, server_key: str, failure_delay: float = 1.0):
        if not server_key:
            raise ValueError("server_key is required")
        self._key = server_key.encode("utf-8")
        self.failure_delay = failure_delay

    def derive_secret(self, qr_hash: str) -> str:
        return hmac.new(self._key, qr_hash.encode("utf-8"), hashlib.sha256).hexdigest()

    def verify(self, qr_hash: str, submitted_secret: str) -> bool:
        if not submitted_secret:
            return False
        return hmac.compare_digest(
            self.derive_secret(qr_hash).encode("utf-8"),
            submitted_secret.encode("utf-8")
        )

    def penalize(self) -> None:
        """Block the current request before it reports a failed lookup or secret"""
        if self.failure_delay > 0:
            time.sleep(self.failure_delay)
