"""Review domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Review
from ...schemas import BookingSummary, UserSummary
from ...shared.pagination import Pagination
from ...shared.validators import require_uuid


class ReviewCreate(BaseModel):
    """Schema for reviewing a completed booking"""

    bookingId: str
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)
    userId: Optional[str] = None

    @field_validator("bookingId")
    @classmethod
    def validate_booking_id(cls, v: str) -> str:
        return require_uuid(v, "booking ID")

    @field_validator("userId")
    @classmethod
    def validate_user_id(cls, v: Optional[str]) -> Optional[str]:
        return require_uuid(v, "user ID") if v else None

    @field_validator("comment")
    @classmethod
    def clean_comment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class ReviewResponse(BaseModel):
    id: str
    userId: str
    bookingId: str
    rating: int
    comment: Optional[str] = None
    createdAt: datetime
    updatedAt: datetime
    user: UserSummary
    booking: BookingSummary

    @classmethod
    def from_model(cls, review: Review) -> "ReviewResponse":
        # Reviews are public, so the reviewer's email stays out
        return cls(
            id=review.id,
            userId=review.user_id,
            bookingId=review.booking_id,
            rating=review.rating,
            comment=review.comment,
            createdAt=review.created_at,
            updatedAt=review.updated_at,
            user=UserSummary.from_model(review.user, include_email=False),
            booking=BookingSummary.from_model(review.booking, include_user=False),
        )


class AverageRating(BaseModel):
    average: float
    count: int


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    averageRating: Optional[AverageRating] = None
    pagination: Pagination
