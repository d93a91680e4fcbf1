"""
Application settings loaded from environment variables (.env supported)
"""
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./poap_qr.db")

# HMAC key used to derive claim secrets - MUST be set in production
SECRET_KEY = os.getenv("SECRET_KEY", "dev-claim-secret-change-in-production")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", 8))

# Delay applied before answering an invalid secret or unknown QR hash
CLAIM_FAILURE_DELAY_SECONDS = float(os.getenv("CLAIM_FAILURE_DELAY_SECONDS", 1.0))

MINT_GATEWAY_URL = os.getenv("MINT_GATEWAY_URL", "http://localhost:8545")
MINT_GATEWAY_TIMEOUT = float(os.getenv("MINT_GATEWAY_TIMEOUT", 30))

CLAIM_BASE_URL = os.getenv("CLAIM_BASE_URL", "https://poap.xyz/claim/")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
