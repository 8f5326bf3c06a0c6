from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError

from spendfy import config
from spendfy.logging_config import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


# ===== PASSWORD HASHING UTILITIES =====

def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt"""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode('utf-8'))


# ===== ACCESS TOKENS =====

def create_access_token(subject: str, issued_at: Optional[datetime] = None) -> str:
    """
    Issue a signed access token for ``subject`` (the user's email).

    The token carries the issuer, the issuance time and an expiry
    ``ACCESS_TOKEN_EXPIRE_MINUTES`` after it.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iss": config.JWT_ISSUER,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[str]:
    """
    Return the subject of a valid token, or None.

    Bad signatures, expired tokens, a wrong issuer and garbage input all
    yield None; this function does not raise.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            issuer=config.JWT_ISSUER,
        )
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return subject
