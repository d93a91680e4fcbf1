from fastapi import APIRouter, Depends, HTTPException, Header
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import Optional
import logging
import jwt

from database.connection import get_db
from models.admin_user import AdminUser
from utils.auth import create_admin_token, verify_admin_token

router = APIRouter()
logger = logging.getLogger(__name__)


class AdminLogin(BaseModel):
    username: str
    password: str


def _admin_from_header(authorization: str, db: Session) -> AdminUser:
    # Remove "Bearer " prefix if present
    token = authorization.replace("Bearer ", "").strip()

    try:
        payload = verify_admin_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired - Please login again")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if not payload:
        raise HTTPException(status_code=401, detail="Invalid token type")

    try:
        admin_id = int(payload["admin_id"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")

    admin = db.query(AdminUser).filter(AdminUser.id == admin_id).first()
    if not admin:
        raise HTTPException(status_code=401, detail="Admin user not found")

    return admin


def get_current_admin(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> AdminUser:
    """
    Dependency to verify JWT admin token and return authenticated admin user
    Validates token signature, expiration, and user existence
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")
    return _admin_from_header(authorization, db)


def get_optional_admin(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> Optional[AdminUser]:
    """Like get_current_admin, but anonymous callers get None (they may send a passphrase)"""
    if not authorization:
        return None
    return _admin_from_header(authorization, db)


@router.post("/admin/login")
def admin_login(credentials: AdminLogin, db: Session = Depends(get_db)):
    """
    Admin login endpoint with JWT token generation
    Returns a signed JWT token that expires in 8 hours
    """
    admin_user = db.query(AdminUser).filter(AdminUser.username == credentials.username).first()

    if not admin_user or not admin_user.verify_password(credentials.password):
        logger.warning(f"Failed admin login for {credentials.username}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_admin_token(admin_user.id)

    return {
        "success": True,
        "token": token,
        "role": "admin",
        "admin_id": admin_user.id,
        "message": "Login successful"
    }
