"""User domain schemas - Pydantic models shared by auth and admin"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...models import User
from ...schemas import UserCounts


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)"""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role.value,
            createdAt=user.created_at,
        )


class UserWithCounts(UserResponse):
    model_config = ConfigDict(populate_by_name=True)

    updatedAt: Optional[datetime] = None
    count: UserCounts = Field(alias="_count")

    @classmethod
    def from_model_with_counts(cls, user: User, counts: dict[str, int]) -> "UserWithCounts":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            role=user.role.value,
            createdAt=user.created_at,
            updatedAt=user.updated_at,
            count=UserCounts(**counts),
        )
