"""Booking domain schemas - Pydantic models for validation"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Booking, BookingStatus
from ...schemas import (
    BusinessSummary,
    PaymentSummary,
    ReviewSummary,
    ServiceSummary,
    UserSummary,
)
from ...shared.pagination import Pagination
from ...shared.validators import require_uuid, validate_photo_url

MAX_PHOTOS = 10


def to_naive_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC; offset-aware input is converted first"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def check_photos(photos: Optional[list[str]]) -> Optional[list[str]]:
    if photos is None:
        return photos
    if len(photos) > MAX_PHOTOS:
        raise ValueError(f"At most {MAX_PHOTOS} photos are allowed")
    return [validate_photo_url(url.strip()) for url in photos]


def clean_notes(notes: Optional[str]) -> Optional[str]:
    if notes is None:
        return notes
    return notes.strip() or None


class BookingCreate(BaseModel):
    """Schema for booking a service"""

    userId: Optional[str] = None
    businessId: str
    serviceId: str
    scheduledAt: datetime
    notes: Optional[str] = Field(None, max_length=2000)
    photos: Optional[list[str]] = None

    @field_validator("userId")
    @classmethod
    def validate_user_id(cls, v: Optional[str]) -> Optional[str]:
        return require_uuid(v, "user ID") if v else None

    @field_validator("businessId")
    @classmethod
    def validate_business_id(cls, v: str) -> str:
        return require_uuid(v, "business ID")

    @field_validator("serviceId")
    @classmethod
    def validate_service_id(cls, v: str) -> str:
        return require_uuid(v, "service ID")

    @field_validator("scheduledAt")
    @classmethod
    def normalize_scheduled_at(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: Optional[str]) -> Optional[str]:
        return clean_notes(v)

    @field_validator("photos")
    @classmethod
    def validate_photos(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return check_photos(v)


class BookingUpdate(BaseModel):
    """Schema for changing a booking's status, notes or photos"""

    status: Optional[BookingStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)
    photos: Optional[list[str]] = None

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: Optional[str]) -> Optional[str]:
        return clean_notes(v)

    @field_validator("photos")
    @classmethod
    def validate_photos(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return check_photos(v)


class BookingResponse(BaseModel):
    id: str
    userId: str
    businessId: str
    serviceId: str
    scheduledAt: datetime
    status: str
    notes: Optional[str] = None
    photos: list[str] = []
    createdAt: datetime
    updatedAt: datetime
    user: UserSummary
    business: BusinessSummary
    service: ServiceSummary
    payment: Optional[PaymentSummary] = None
    review: Optional[ReviewSummary] = None

    @classmethod
    def from_model(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            userId=booking.user_id,
            businessId=booking.business_id,
            serviceId=booking.service_id,
            scheduledAt=booking.scheduled_at,
            status=booking.status.value,
            notes=booking.notes,
            photos=list(booking.photos or []),
            createdAt=booking.created_at,
            updatedAt=booking.updated_at,
            user=UserSummary.from_model(booking.user, include_phone=True),
            business=BusinessSummary.from_model(booking.business),
            service=ServiceSummary.from_model(booking.service),
            payment=PaymentSummary.from_model(booking.payment) if booking.payment else None,
            review=ReviewSummary.from_model(booking.review) if booking.review else None,
        )


class BookingListResponse(BaseModel):
    bookings: list[BookingResponse]
    pagination: Pagination
