"""Booking repository - Database operations for bookings"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import ACTIVE_BOOKING_STATUSES, Booking, BookingStatus, Business


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _with_details(query):
        return query.options(
            joinedload(Booking.user),
            joinedload(Booking.business),
            joinedload(Booking.service),
            joinedload(Booking.payment),
            joinedload(Booking.review),
        )

    @classmethod
    def get_by_id(cls, db: Session, booking_id: str) -> Optional[Booking]:
        return cls._with_details(db.query(Booking)).filter(Booking.id == booking_id).first()

    @staticmethod
    def find_active_at(db: Session, business_id: str, scheduled_at: datetime) -> Optional[Booking]:
        """The booking currently holding a business time slot, if any"""
        return (
            db.query(Booking)
            .filter(
                Booking.business_id == business_id,
                Booking.scheduled_at == scheduled_at,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
            )
            .first()
        )

    @classmethod
    def search_bookings(
        cls,
        db: Session,
        user_id: Optional[str] = None,
        business_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
        owner_id: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[Booking], int]:
        """
        Filter bookings, newest first.

        owner_id restricts results to businesses owned by that user.
        """
        query = db.query(Booking)
        if user_id:
            query = query.filter(Booking.user_id == user_id)
        if business_id:
            query = query.filter(Booking.business_id == business_id)
        if status:
            query = query.filter(Booking.status == status)
        if owner_id:
            query = query.join(Business, Booking.business_id == Business.id).filter(
                Business.owner_id == owner_id
            )

        total = query.count()
        bookings = (
            cls._with_details(query)
            .order_by(Booking.created_at.desc(), Booking.id)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return bookings, total

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        """Stage a new booking; the caller commits"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking
