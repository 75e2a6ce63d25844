"""
Security Module
JWT access token creation and verification.
Tokens are issued by the account service; this engine only verifies them.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt

from flashlearn.config import settings


logger = logging.getLogger(__name__)


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT for a user id (used by tooling and tests).

    Args:
        subject: User ID stored in the ``sub`` claim
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)
    """
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"sub": subject, "exp": expire},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def verify_token(token: str) -> Optional[dict]:
    """Decode a JWT, returning None if it is invalid or expired."""
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Invalid token: {e}")
        return None


def get_user_id_from_token(token: str) -> Optional[str]:
    payload = verify_token(token)
    if payload:
        return payload.get("sub")
    return None
