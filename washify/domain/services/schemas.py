"""Service domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import Service, ServiceTier
from ...schemas import BookingCount, BusinessSummary
from ...shared.pagination import Pagination
from ...shared.validators import require_uuid


class ServiceCreate(BaseModel):
    """Schema for adding a service to a business"""

    businessId: str
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    duration: int = Field(..., gt=0, description="Duration in minutes")
    tier: ServiceTier

    @field_validator("businessId")
    @classmethod
    def validate_business_id(cls, v: str) -> str:
        return require_uuid(v, "business ID")

    @field_validator("name", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v


class ServiceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    businessId: str
    name: str
    description: str
    price: float
    duration: int
    tier: str
    createdAt: datetime
    updatedAt: datetime
    business: BusinessSummary
    count: Optional[BookingCount] = Field(default=None, alias="_count")

    @classmethod
    def from_model(cls, service: Service, booking_count: Optional[int] = None) -> "ServiceResponse":
        return cls(
            id=service.id,
            businessId=service.business_id,
            name=service.name,
            description=service.description,
            price=service.price,
            duration=service.duration,
            tier=service.tier.value,
            createdAt=service.created_at,
            updatedAt=service.updated_at,
            business=BusinessSummary.from_model(service.business),
            count=BookingCount(bookings=booking_count) if booking_count is not None else None,
        )


class ServiceListResponse(BaseModel):
    services: list[ServiceResponse]
    pagination: Pagination
