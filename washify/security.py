"""
Security primitives: password hashing and signed access tokens.

Passwords are hashed with bcrypt through passlib. Access tokens are HS256 JWTs
signed with python-jose and carry the user's id, email and role.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRES_IN, JWT_SECRET

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


class TokenError(Exception):
    """Raised when an access token cannot be trusted"""


class TokenExpiredError(TokenError):
    pass


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# ACCESS TOKENS
# ============================================================================


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as "3600", "90m", "12h" or "7d".

    Raises:
        ValueError: If the value is not a recognised duration
    """
    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit])


def create_access_token(user_id: str, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token embedding the user's id, email and role"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else parse_duration(JWT_EXPIRES_IN))
    payload = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jose_jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token

    Raises:
        TokenExpiredError: If the token is past its expiry
        TokenError: If the token is malformed or its signature is invalid
    """
    try:
        payload = jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise TokenError("Invalid token") from e

    if not payload.get("userId") or not payload.get("role"):
        raise TokenError("Invalid token")
    return payload


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from an "Authorization: Bearer <token>" header value"""
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]
