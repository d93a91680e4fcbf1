"""
Tests for claim secret derivation
"""
import hashlib
import hmac
import time

import pytest

from services.secret_verifier import SecretVerifier


class TestSecretVerifier:
    """Test HMAC secret derivation and verification"""

    def test_derive_is_deterministic(self):
        verifier = SecretVerifier("server-key", failure_delay=0)
        assert verifier.derive_secret("abc123") == verifier.derive_secret("abc123")

    def test_derive_is_hmac_sha256_hex(self):
        verifier = SecretVerifier("server-key", failure_delay=0)
        expected = hmac.new(b"server-key", b"abc123", hashlib.sha256).hexdigest()
        assert verifier.derive_secret("abc123") == expected

    def test_different_hashes_give_different_secrets(self):
        verifier = SecretVerifier("server-key", failure_delay=0)
        assert verifier.derive_secret("abc123") != verifier.derive_secret("abc124")

    def test_secret_depends_on_server_key(self):
        first = SecretVerifier("key-one", failure_delay=0)
        second = SecretVerifier("key-two", failure_delay=0)
        assert first.derive_secret("abc123") != second.derive_secret("abc123")

    def test_verify(self):
        verifier = SecretVerifier("server-key", failure_delay=0)
        secret = verifier.derive_secret("abc123")
        assert verifier.verify("abc123", secret) is True
        assert verifier.verify("abc123", secret.upper()) is False
        assert verifier.verify("abc124", secret) is False
        assert verifier.verify("abc123", "") is False

    def test_verify_non_ascii_secret(self):
        verifier = SecretVerifier("server-key", failure_delay=0)
        assert verifier.verify("abc123", "é") is False
        assert verifier.verify("abc123", verifier.derive_secret("abc123")[:-1] + "é") is False

    def test_empty_server_key_rejected(self):
        with pytest.raises(ValueError):
            SecretVerifier("")

    def test_penalize_waits_for_failure_delay(self):
        verifier = SecretVerifier("server-key", failure_delay=0.1)
        started = time.monotonic()
        verifier.penalize()
        assert time.monotonic() - started >= 0.1
