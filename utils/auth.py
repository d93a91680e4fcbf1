"""
Authentication utilities for JWT token generation and validation
Administrators log in with username/password and receive an 8 hour token
"""
import jwt
from datetime import datetime, timedelta
from typing import Optional, Dict

from config import JWT_SECRET_KEY, JWT_EXPIRATION_HOURS

JWT_ALGORITHM = "HS256"


def create_admin_token(admin_id: int) -> str:
    """
    Create a JWT token for an authenticated admin user

    Token includes:
        - sub: admin user id
        - exp: Expiration timestamp
        - iat: Issued at timestamp
        - type: Token type identifier
    """
    payload = {
        "sub": str(admin_id),
        "exp": datetime.utcnow() + timedelta(hours=JWT_EXPIRATION_HOURS),
        "iat": datetime.utcnow(),
        "type": "admin"
    }

    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_admin_token(token: str) -> Optional[Dict[str, str]]:
    """
    Verify and decode an admin JWT token

    Returns:
        Dict with admin_id if valid, None if the token is not an admin token

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid
    """
    payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])

    if payload.get("type") != "admin":
        return None

    return {"admin_id": payload.get("sub")}
