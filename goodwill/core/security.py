"""
Bearer token helpers

Tokens are issued by the authentication service; this API only needs to
read the caller's phone number from the `sub` claim.
"""
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import logging

from jose import jwt, JWTError

from goodwill.core.config import settings

logger = logging.getLogger(__name__)


def create_access_token(phone_number: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token for a phone number

    Args:
        phone_number: Subject of the token
        expires_delta: Optional lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": phone_number,
        "type": "access",
        "exp": datetime.utcnow() + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT

    Returns:
        Token payload, or None if the token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.info(f"Token validation failed: {e}")
        return None
