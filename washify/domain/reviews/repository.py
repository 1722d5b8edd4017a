"""Review repository - Database operations for reviews"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Review


class ReviewRepository:
    """Repository for review database operations"""

    @staticmethod
    def _with_details(query):
        return query.options(
            joinedload(Review.user),
            joinedload(Review.booking).joinedload(Booking.service),
            joinedload(Review.booking).joinedload(Booking.business),
        )

    @classmethod
    def get_by_id(cls, db: Session, review_id: str) -> Optional[Review]:
        return cls._with_details(db.query(Review)).filter(Review.id == review_id).first()

    @staticmethod
    def get_by_booking(db: Session, booking_id: str) -> Optional[Review]:
        return db.query(Review).filter(Review.booking_id == booking_id).first()

    @staticmethod
    def _filtered_query(
        db: Session,
        business_id: Optional[str],
        user_id: Optional[str],
        min_rating: Optional[int],
        max_rating: Optional[int],
    ):
        query = db.query(Review)
        if business_id:
            query = query.join(Booking, Review.booking_id == Booking.id).filter(
                Booking.business_id == business_id
            )
        if user_id:
            query = query.filter(Review.user_id == user_id)
        if min_rating is not None:
            query = query.filter(Review.rating >= min_rating)
        if max_rating is not None:
            query = query.filter(Review.rating <= max_rating)
        return query

    @classmethod
    def search_reviews(
        cls,
        db: Session,
        business_id: Optional[str] = None,
        user_id: Optional[str] = None,
        min_rating: Optional[int] = None,
        max_rating: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Review], int]:
        query = cls._filtered_query(db, business_id, user_id, min_rating, max_rating)
        total = query.count()
        reviews = (
            cls._with_details(query)
            .order_by(Review.created_at.desc(), Review.id)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return reviews, total

    @staticmethod
    def business_rating(db: Session, business_id: str) -> tuple[Optional[float], int]:
        """Average rating and review count across all of a business's bookings"""
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .join(Booking, Review.booking_id == Booking.id)
            .filter(Booking.business_id == business_id)
            .one()
        )
        return (float(average) if average is not None else None), count

    @staticmethod
    def create_review(db: Session, **review_data) -> Review:
        """Stage a new review; the caller commits"""
        review = Review(**review_data)
        db.add(review)
        db.flush()
        return review
