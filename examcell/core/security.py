# /examcell/core/security.py

"""
Cryptographic helpers: bcrypt password hashing and the signing/decoding of
JWT access tokens. Nothing in here touches the database.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

from . import config

logger = logging.getLogger(__name__)


# --- Passwords ---

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    """Returns False for a missing hash, a mismatch, or a hash bcrypt cannot read."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash could not be checked (malformed hash or over-long password).")
        return False


# --- Tokens ---

def create_access_token(
    subject: str,
    claims: Optional[Dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Signs a token whose `sub` is the principal's email. `claims` carries the
    extra `id` and `role` entries. `iat` and `exp` are always set.
    """
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: Dict[str, Any] = dict(claims or {})
    to_encode.update({"sub": subject, "iat": issued_at, "exp": expires_at})
    return jwt.encode(to_encode, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Verifies signature, structure and expiry. Every failure returns None; the
    reason is only logged, never handed back to the caller.
    """
    if not token or not token.strip():
        logger.warning("JWT validation failed: token string is empty or missing.")
        return None
    try:
        return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        logger.info("JWT token is expired: %s", e)
    except JWTError as e:
        logger.warning("Invalid JWT token: %s", e)
    return None
