"""
Tests for the address resolver, bulk creator helpers and background runner
"""
import logging

import pytest
import requests

from conftest import FakeGateway
from services.address_resolver import AddressResolver
from services.background import fire_and_forget
from services.bulk_creator import find_duplicates
from services.errors import GatewayError
from services.mint_gateway import MintGateway, TxHandle


class TestAddressResolver:

    def test_hex_address_is_lowercased(self):
        resolver = AddressResolver(FakeGateway())
        assert resolver.normalize("0x" + "AB" * 20) == "0x" + "ab" * 20

    def test_surrounding_spaces(self):
        resolver = AddressResolver(FakeGateway())
        assert resolver.normalize("  0x" + "ab" * 20 + " ") == "0x" + "ab" * 20

    def test_short_hex_is_invalid(self):
        resolver = AddressResolver(FakeGateway())
        assert resolver.normalize("0x1234") is None

    def test_ens_name(self):
        gateway = FakeGateway()
        gateway.ens["alice.eth"] = "0x" + "CD" * 20
        assert AddressResolver(gateway).normalize("alice.eth") == "0x" + "cd" * 20

    def test_unresolved_ens_name(self):
        assert AddressResolver(FakeGateway()).normalize("nobody.eth") is None

    def test_ens_lookup_failure(self):
        gateway = FakeGateway()

        def unreachable(name):
            raise GatewayError("timeout")
        gateway.resolve_ens = unreachable

        assert AddressResolver(gateway).normalize("alice.eth") is None

    def test_empty_input(self):
        assert AddressResolver(FakeGateway()).normalize("") is None


class TestFindDuplicates:

    def test_no_duplicates(self):
        assert find_duplicates(["a", "b", "c"]) == []

    def test_reports_each_duplicate_once(self):
        assert find_duplicates(["a", "b", "a", "a", "b"]) == ["a", "b"]


class TestFireAndForget:

    def test_runs_task(self):
        calls = []
        fire_and_forget(calls.append, "done")()
        assert calls == ["done"]

    def test_failure_is_logged(self, caplog):
        def broken():
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR):
            fire_and_forget(broken)()

        assert "Background task broken failed" in caplog.text


class FakeResponse:

    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class TestMintGateway:

    def gateway_answering(self, monkeypatch, payload, status_code=200):
        gateway = MintGateway("http://signer.local/", timeout=5)
        calls = []

        def fake_request(method, url, timeout=None, **kwargs):
            calls.append((method, url, kwargs.get("json")))
            return FakeResponse(payload, status_code)

        monkeypatch.setattr(requests, "request", fake_request)
        return gateway, calls

    def test_mint_direct(self, monkeypatch):
        gateway, calls = self.gateway_answering(monkeypatch, {"hash": "0xabc", "from": "0xsigner"})

        tx = gateway.mint_direct(7, "0x" + "ab" * 20)

        assert tx == TxHandle(hash="0xabc", signer="0xsigner")
        assert calls == [("POST", "http://signer.local/mint", {"event_id": 7, "address": "0x" + "ab" * 20})]

    def test_mint_without_hash(self, monkeypatch):
        gateway, _ = self.gateway_answering(monkeypatch, {})
        assert gateway.mint_direct(7, "0x" + "ab" * 20) is None

    def test_http_error(self, monkeypatch):
        gateway, _ = self.gateway_answering(monkeypatch, {}, status_code=502)
        with pytest.raises(GatewayError):
            gateway.mint_direct(7, "0x" + "ab" * 20)

    def test_sign_delegated_lowercases_address(self, monkeypatch):
        gateway, calls = self.gateway_answering(monkeypatch, {"signature": "0xsig"})

        assert gateway.sign_delegated(7, "0x" + "AB" * 20) == "0xsig"
        assert calls[0][2] == {"event_id": 7, "address": "0x" + "ab" * 20}

    def test_missing_signature(self, monkeypatch):
        gateway, _ = self.gateway_answering(monkeypatch, {})
        with pytest.raises(GatewayError):
            gateway.sign_delegated(7, "0x" + "ab" * 20)

    def test_transaction_status_and_ens(self, monkeypatch):
        gateway, calls = self.gateway_answering(monkeypatch, {"status": "passed", "address": "0xabc"})

        assert gateway.transaction_status("0xtx") == "passed"
        assert gateway.resolve_ens("alice.eth") == "0xabc"
        assert [url for _, url, _ in calls] == [
            "http://signer.local/transactions/0xtx",
            "http://signer.local/ens/alice.eth",
        ]

    def test_non_object_body(self, monkeypatch):
        for payload in (None, ["0xabc"]):
            gateway, _ = self.gateway_answering(monkeypatch, payload)
            with pytest.raises(GatewayError):
                gateway.mint_direct(7, "0x" + "ab" * 20)
