"""Auth domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import UserRole
from ...shared.validators import validate_email, validate_phone
from ..users.schemas import UserResponse, UserWithCounts


class SignupRequest(BaseModel):
    """Schema for creating an account"""

    name: str = Field(..., min_length=2, max_length=255)
    email: str
    password: str = Field(..., min_length=6, max_length=72)  # bcrypt ignores bytes past 72
    role: UserRole = UserRole.CUSTOMER
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v: Optional[str]) -> Optional[str]:
        return validate_phone(v)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class TokenInfo(BaseModel):
    userId: str
    email: str
    role: str
    issuedAt: Optional[datetime] = None
    expiresAt: Optional[datetime] = None


class MeResponse(BaseModel):
    user: UserWithCounts
    tokenInfo: TokenInfo
