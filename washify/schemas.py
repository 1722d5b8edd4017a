"""Response fragments shared across domains (nested summaries of related rows)"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .models import Booking, Business, Payment, Review, Service, User


class UserSummary(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_model(
        cls, user: User, include_email: bool = True, include_phone: bool = False, include_role: bool = False
    ) -> "UserSummary":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email if include_email else None,
            phone=user.phone if include_phone else None,
            role=user.role.value if include_role else None,
        )


class BusinessSummary(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @classmethod
    def from_model(cls, business: Business, include_location: bool = True) -> "BusinessSummary":
        if not include_location:
            return cls(id=business.id, name=business.name)
        return cls(
            id=business.id,
            name=business.name,
            address=business.address,
            lat=business.lat,
            lng=business.lng,
        )


class ServiceSummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: Optional[int] = None
    tier: Optional[str] = None

    @classmethod
    def from_model(cls, service: Service) -> "ServiceSummary":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            price=service.price,
            duration=service.duration,
            tier=service.tier.value,
        )


class PaymentSummary(BaseModel):
    id: str
    amount: float
    currency: str
    status: str
    provider: str
    paidAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, payment: Payment) -> "PaymentSummary":
        return cls(
            id=payment.id,
            amount=payment.amount,
            currency=payment.currency,
            status=payment.status.value,
            provider=payment.provider,
            paidAt=payment.paid_at,
        )


class ReviewSummary(BaseModel):
    id: str
    rating: int
    comment: Optional[str] = None
    createdAt: datetime

    @classmethod
    def from_model(cls, review: Review) -> "ReviewSummary":
        return cls(
            id=review.id,
            rating=review.rating,
            comment=review.comment,
            createdAt=review.created_at,
        )


class BookingSummary(BaseModel):
    """Booking as seen from a payment or review, with its service and business"""

    id: str
    userId: str
    businessId: str
    serviceId: str
    scheduledAt: datetime
    status: str
    notes: Optional[str] = None
    user: Optional[UserSummary] = None
    service: Optional[ServiceSummary] = None
    business: Optional[BusinessSummary] = None

    @classmethod
    def from_model(cls, booking: Booking, include_user: bool = True) -> "BookingSummary":
        return cls(
            id=booking.id,
            userId=booking.user_id,
            businessId=booking.business_id,
            serviceId=booking.service_id,
            scheduledAt=booking.scheduled_at,
            status=booking.status.value,
            notes=booking.notes,
            user=UserSummary.from_model(booking.user) if include_user else None,
            service=ServiceSummary.from_model(booking.service),
            business=BusinessSummary.from_model(booking.business, include_location=False),
        )


class BookingCount(BaseModel):
    bookings: int


class UserCounts(BaseModel):
    ownedBusinesses: int
    bookings: int
    reviews: int


