"""
FastAPI providers for the claim services and their collaborators
Tests replace these through app.dependency_overrides
"""
from fastapi import BackgroundTasks, Depends
from sqlalchemy.orm import Session

import config
from crud.qr_claim import QrClaimRepository
from database.connection import SessionLocal, get_db
from services.address_resolver import AddressResolver
from services.assignment import AssignmentEngine
from services.background import fire_and_forget
from services.bulk_creator import BulkCreator
from services.claim_state_machine import ClaimStateMachine
from services.mint_gateway import MintGateway
from services.secret_verifier import SecretVerifier
from services.transaction_status import TransactionStatusSource, refresh_transaction_status


def get_secret_verifier() -> SecretVerifier:
    return SecretVerifier(config.SECRET_KEY, failure_delay=config.CLAIM_FAILURE_DELAY_SECONDS)


def get_mint_gateway() -> MintGateway:
    return MintGateway(config.MINT_GATEWAY_URL, timeout=config.MINT_GATEWAY_TIMEOUT)


def get_session_factory():
    """Session factory for work that outlives the request session"""
    return SessionLocal


def get_repository(db: Session = Depends(get_db)) -> QrClaimRepository:
    return QrClaimRepository(db)


def get_claim_state_machine(
    background_tasks: BackgroundTasks,
    repository: QrClaimRepository = Depends(get_repository),
    verifier: SecretVerifier = Depends(get_secret_verifier),
    gateway: MintGateway = Depends(get_mint_gateway),
    session_factory=Depends(get_session_factory),
) -> ClaimStateMachine:
    def schedule_refresh(tx_hash: str):
        background_tasks.add_task(
            fire_and_forget(refresh_transaction_status, gateway, tx_hash, session_factory=session_factory)
        )

    return ClaimStateMachine(
        repository=repository,
        verifier=verifier,
        gateway=gateway,
        resolver=AddressResolver(gateway),
        tx_status=TransactionStatusSource(repository),
        schedule=schedule_refresh,
    )


def get_assignment_engine(repository: QrClaimRepository = Depends(get_repository)) -> AssignmentEngine:
    return AssignmentEngine(repository)


def get_bulk_creator(repository: QrClaimRepository = Depends(get_repository)) -> BulkCreator:
    return BulkCreator(repository)
