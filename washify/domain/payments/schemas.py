"""Payment domain schemas - Pydantic models for validation"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Payment
from ...schemas import BookingSummary
from ...shared.pagination import Pagination
from ...shared.validators import require_uuid


class PaymentCreate(BaseModel):
    """Schema for recording a payment against a booking"""

    bookingId: str
    amount: float = Field(..., gt=0)
    currency: str = "USD"
    provider: str = Field(..., min_length=1, max_length=50)
    providerId: Optional[str] = Field(None, max_length=255)

    @field_validator("bookingId")
    @classmethod
    def validate_booking_id(cls, v: str) -> str:
        return require_uuid(v, "booking ID")

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if not re.match(r"^[A-Z]{3}$", v):
            raise ValueError("Currency must be a 3-letter ISO code")
        return v

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Provider is required")
        return v


class PaymentResponse(BaseModel):
    id: str
    bookingId: str
    amount: float
    currency: str
    status: str
    provider: str
    providerId: Optional[str] = None
    paidAt: Optional[datetime] = None
    createdAt: datetime
    updatedAt: datetime
    booking: BookingSummary

    @classmethod
    def from_model(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            bookingId=payment.booking_id,
            amount=payment.amount,
            currency=payment.currency,
            status=payment.status.value,
            provider=payment.provider,
            providerId=payment.provider_id,
            paidAt=payment.paid_at,
            createdAt=payment.created_at,
            updatedAt=payment.updated_at,
            booking=BookingSummary.from_model(payment.booking),
        )


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]
    pagination: Pagination
