import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .models import UserRole
from .security import TokenError, TokenExpiredError, decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenPayload:
    """Identity carried by a verified access token"""

    user_id: str
    email: str
    role: UserRole
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def _timestamp(value) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def payload_from_token(token: str) -> TokenPayload:
    """
    Decode a raw token into a TokenPayload.

    Raises:
        HTTPException: 401 when the token is invalid, expired or names an unknown role
    """
    try:
        claims = decode_access_token(token)
        role = UserRole(claims["role"])
    except TokenExpiredError as e:
        raise HTTPException(status_code=401, detail="Token expired") from e
    except (TokenError, ValueError) as e:
        raise HTTPException(status_code=401, detail="Invalid token") from e

    return TokenPayload(
        user_id=claims["userId"],
        email=claims.get("email", ""),
        role=role,
        issued_at=_timestamp(claims.get("iat")),
        expires_at=_timestamp(claims.get("exp")),
    )


async def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenPayload:
    """Authenticated identity for the request, 401 if absent or invalid"""
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Authorization token required")
    return payload_from_token(credentials.credentials)


def require_roles(*roles: UserRole):
    """
    Build a dependency that admits only the given roles.

    Example usage:
        @router.post("")
        async def create_thing(user: TokenPayload = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    allowed = frozenset(roles)
    allowed_label = ", ".join(role.value for role in roles)

    async def guard(user: TokenPayload = Depends(get_current_token)) -> TokenPayload:
        if user.role not in allowed:
            logger.warning(
                f"Access denied for user {user.user_id} with role {user.role.value} (requires {allowed_label})"
            )
            raise HTTPException(
                status_code=403, detail=f"Access denied. Required roles: {allowed_label}"
            )
        return user

    return guard


require_admin = require_roles(UserRole.ADMIN)
require_operator = require_roles(UserRole.OPERATOR, UserRole.ADMIN)
require_user = require_roles(UserRole.CUSTOMER, UserRole.OPERATOR, UserRole.ADMIN)


async def optional_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenPayload]:
    """Identity if a valid token was sent, otherwise None; never rejects"""
    if not credentials or not credentials.credentials:
        return None
    try:
        return payload_from_token(credentials.credentials)
    except HTTPException:
        return None
