"""Payment repository - Database operations for payments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Business, Payment, PaymentStatus


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    def _with_booking(query):
        return query.options(
            joinedload(Payment.booking).joinedload(Booking.user),
            joinedload(Payment.booking).joinedload(Booking.service),
            joinedload(Payment.booking).joinedload(Booking.business),
        )

    @classmethod
    def get_by_id(cls, db: Session, payment_id: str) -> Optional[Payment]:
        return cls._with_booking(db.query(Payment)).filter(Payment.id == payment_id).first()

    @staticmethod
    def get_by_booking(db: Session, booking_id: str) -> Optional[Payment]:
        return db.query(Payment).filter(Payment.booking_id == booking_id).first()

    @classmethod
    def search_payments(
        cls,
        db: Session,
        booking_id: Optional[str] = None,
        business_id: Optional[str] = None,
        status: Optional[PaymentStatus] = None,
        owner_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Payment], int]:
        query = db.query(Payment).join(Booking, Payment.booking_id == Booking.id)
        if booking_id:
            query = query.filter(Payment.booking_id == booking_id)
        if business_id:
            query = query.filter(Booking.business_id == business_id)
        if status:
            query = query.filter(Payment.status == status)
        if owner_id:
            query = query.join(Business, Booking.business_id == Business.id).filter(
                Business.owner_id == owner_id
            )

        total = query.count()
        payments = (
            cls._with_booking(query)
            .order_by(Payment.created_at.desc(), Payment.id)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return payments, total

    @staticmethod
    def create_payment(db: Session, **payment_data) -> Payment:
        """Stage a new payment; the caller commits"""
        payment = Payment(**payment_data)
        db.add(payment)
        db.flush()
        return payment
