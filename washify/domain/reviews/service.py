"""Review service - reviews of completed bookings"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import BookingStatus, PaymentStatus
from ...shared.pagination import PageParams, build_pagination
from ..bookings.repository import BookingRepository
from ..users.repository import UserRepository
from .repository import ReviewRepository
from .schemas import AverageRating, ReviewCreate, ReviewListResponse, ReviewResponse

logger = logging.getLogger(__name__)

DUPLICATE_REVIEW = "Review already exists for this booking"


class ReviewService:
    """Service layer for review business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()
        self.users = UserRepository()
        self.bookings = BookingRepository()

    def create_review(self, data: ReviewCreate, current_user: TokenPayload) -> ReviewResponse:
        user_id = data.userId or current_user.user_id
        if user_id != current_user.user_id and not current_user.is_admin:
            logger.warning(f"User {current_user.user_id} tried to review as {user_id}")
            raise HTTPException(status_code=403, detail="You can only write reviews as yourself")

        if not self.users.get_by_id(self.db, user_id):
            raise HTTPException(status_code=404, detail="User not found")

        booking = self.bookings.get_by_id(self.db, data.bookingId)
        if not booking or booking.user_id != user_id:
            raise HTTPException(
                status_code=404, detail="Booking not found or does not belong to this user"
            )

        if booking.status != BookingStatus.COMPLETED:
            raise HTTPException(status_code=400, detail="Can only review completed bookings")

        if booking.review or self.repo.get_by_booking(self.db, booking.id):
            raise HTTPException(status_code=409, detail=DUPLICATE_REVIEW)

        if booking.payment and booking.payment.status != PaymentStatus.PAID:
            raise HTTPException(status_code=400, detail="Cannot review unpaid bookings")

        try:
            review = self.repo.create_review(
                self.db,
                user_id=user_id,
                booking_id=booking.id,
                rating=data.rating,
                comment=data.comment,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Review for booking {booking.id} written concurrently")
            raise HTTPException(status_code=409, detail=DUPLICATE_REVIEW) from e

        logger.info(f"Review {review.id} ({data.rating}/5) posted for booking {booking.id}")
        return ReviewResponse.from_model(self.repo.get_by_id(self.db, review.id))

    def list_reviews(
        self,
        business_id: Optional[str],
        user_id: Optional[str],
        min_rating: Optional[int],
        max_rating: Optional[int],
        page: PageParams,
    ) -> ReviewListResponse:
        reviews, total = self.repo.search_reviews(
            self.db, business_id, user_id, min_rating, max_rating, page.limit, page.offset
        )

        average_rating = None
        if business_id:
            average, count = self.repo.business_rating(self.db, business_id)
            average_rating = AverageRating(
                average=round(average, 1) if average else 0, count=count
            )

        return ReviewListResponse(
            reviews=[ReviewResponse.from_model(r) for r in reviews],
            averageRating=average_rating,
            pagination=build_pagination(total, page),
        )
