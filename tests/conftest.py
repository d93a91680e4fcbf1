"""
Test configuration and fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database.connection import Base, get_db

# Import all models BEFORE importing app to ensure they're registered
from models.admin_user import AdminUser
from models.event import Event
from models.event_host import EventHost
from models.event_template import EventTemplate
from models.qr_claim import QrClaim
from models.qr_roll import QrRoll
from models.transaction import Transaction

from main import app
from services.errors import GatewayError
from services.mint_gateway import TxHandle
from services.secret_verifier import SecretVerifier
from utils.auth import create_admin_token
from utils.dependencies import get_mint_gateway, get_secret_verifier, get_session_factory

TEST_DATABASE_URL = "sqlite:///./test.db"
TEST_SECRET_KEY = "test-server-key"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    echo=False  # Set to True to debug SQL
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeGateway:
    """In-memory stand-in for the signer service"""

    def __init__(self):
        self.minted = []
        self.signed = []
        self.ens = {}
        self.fail_mint = False
        self.raise_on_mint = False
        self.fail_sign = False
        self.on_mint = None
        self.tx_status = "passed"

    def mint_direct(self, event_id, address):
        if self.on_mint:
            self.on_mint()
        if self.raise_on_mint:
            raise GatewayError("node unreachable")
        if self.fail_mint:
            return None
        self.minted.append((event_id, address))
        return TxHandle(hash=f"0xtx{len(self.minted)}", signer="0xsigner")

    def sign_delegated(self, event_id, address):
        if self.fail_sign:
            raise GatewayError("signer unavailable")
        self.signed.append((event_id, address))
        return f"0xsig-{event_id}-{address[-4:]}"

    def transaction_status(self, tx_hash):
        return self.tx_status

    def resolve_ens(self, name):
        return self.ens.get(name)


@pytest.fixture
def db_session():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def verifier():
    return SecretVerifier(TEST_SECRET_KEY, failure_delay=0)


@pytest.fixture
def client(db_session, gateway, verifier):
    """Create a test client with test database and fake signer service"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mint_gateway] = lambda: gateway
    app.dependency_overrides[get_secret_verifier] = lambda: verifier
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_event(db_session):
    def _make_event(fancy_id="test-event", from_admin=False, template=None):
        event = Event(
            fancy_id=fancy_id,
            name=fancy_id.replace("-", " ").title(),
            from_admin=from_admin,
            event_template_id=template.id if template else None
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _make_event


@pytest.fixture
def make_claim(db_session):
    def _make_claim(qr_hash, event=None, numeric_id=None, roll=None, claimed=False,
                    delegated_mint=False, beneficiary=None):
        claim = QrClaim(
            qr_hash=qr_hash,
            numeric_id=numeric_id,
            event_id=event.id if event else None,
            qr_roll_id=roll.id if roll else None,
            claimed=claimed,
            delegated_mint=delegated_mint,
            beneficiary=beneficiary
        )
        db_session.add(claim)
        db_session.commit()
        db_session.refresh(claim)
        return claim
    return _make_claim


@pytest.fixture
def host_with_roll(db_session):
    """Event host with one roll; returns (host, roll)"""
    host = EventHost(passphrase="host-passphrase")
    db_session.add(host)
    db_session.commit()
    db_session.refresh(host)

    roll = QrRoll(event_host_id=host.id)
    db_session.add(roll)
    db_session.commit()
    db_session.refresh(roll)
    return host, roll


@pytest.fixture
def admin_headers(db_session):
    admin = AdminUser(username="admin", password_hash=AdminUser.hash_password("admin123"))
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return {"Authorization": f"Bearer {create_admin_token(admin.id)}"}


def secret_for(qr_hash):
    return SecretVerifier(TEST_SECRET_KEY).derive_secret(qr_hash)
