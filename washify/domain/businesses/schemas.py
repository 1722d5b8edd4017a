"""Business domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import Business
from ...schemas import BookingCount, ServiceSummary, UserSummary
from ...shared.pagination import Pagination
from ...shared.validators import require_uuid


class BusinessCreate(BaseModel):
    """Schema for registering a business"""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    ownerId: Optional[str] = None  # Defaults to the caller

    @field_validator("name", "address")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("ownerId")
    @classmethod
    def validate_owner_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return require_uuid(v, "owner ID")


class BusinessResponse(BaseModel):
    """Business as returned after registration"""

    id: str
    name: str
    address: str
    lat: float
    lng: float
    ownerId: str
    createdAt: datetime
    updatedAt: datetime
    owner: UserSummary

    @classmethod
    def from_model(cls, business: Business) -> "BusinessResponse":
        return cls(
            id=business.id,
            name=business.name,
            address=business.address,
            lat=business.lat,
            lng=business.lng,
            ownerId=business.owner_id,
            createdAt=business.created_at,
            updatedAt=business.updated_at,
            owner=UserSummary.from_model(business.owner, include_role=True),
        )


class BusinessListItem(BaseModel):
    """Business in discovery results, with owner, services and booking count"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    address: str
    lat: float
    lng: float
    ownerId: str
    createdAt: datetime
    updatedAt: datetime
    owner: UserSummary
    services: list[ServiceSummary]
    count: BookingCount = Field(alias="_count")
    distance: Optional[float] = None

    @classmethod
    def from_model(
        cls, business: Business, booking_count: int, distance: Optional[float] = None
    ) -> "BusinessListItem":
        services = sorted(business.services, key=lambda s: s.price)
        return cls(
            id=business.id,
            name=business.name,
            address=business.address,
            lat=business.lat,
            lng=business.lng,
            ownerId=business.owner_id,
            createdAt=business.created_at,
            updatedAt=business.updated_at,
            owner=UserSummary.from_model(business.owner),
            services=[ServiceSummary.from_model(s) for s in services],
            count=BookingCount(bookings=booking_count),
            distance=round(distance, 2) if distance is not None else None,
        )


class BusinessListResponse(BaseModel):
    businesses: list[BusinessListItem]
    pagination: Pagination
