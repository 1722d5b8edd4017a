"""Payment service - recording and listing booking payments"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import CASH_PROVIDER, PaymentStatus, UserRole, utcnow
from ...shared.pagination import PageParams, build_pagination
from ..bookings.repository import BookingRepository
from .repository import PaymentRepository
from .schemas import PaymentCreate, PaymentListResponse, PaymentResponse

logger = logging.getLogger(__name__)

DUPLICATE_PAYMENT = "Payment already exists for this booking"


class PaymentService:
    """Service layer for payment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepository()
        self.bookings = BookingRepository()

    def create_payment(self, data: PaymentCreate, current_user: TokenPayload) -> PaymentResponse:
        """
        Record the payment for a booking.

        Cash payments are settled on the spot; any other provider stays
        PENDING until the provider confirms it.
        """
        booking = self.bookings.get_by_id(self.db, data.bookingId)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        allowed = (
            booking.user_id == current_user.user_id
            or booking.business.owner_id == current_user.user_id
            or current_user.is_admin
        )
        if not allowed:
            logger.warning(f"User {current_user.user_id} tried to pay for booking {booking.id}")
            raise HTTPException(status_code=403, detail="You can only pay for your own bookings")

        if booking.payment or self.repo.get_by_booking(self.db, booking.id):
            raise HTTPException(status_code=409, detail=DUPLICATE_PAYMENT)

        if data.amount != booking.service.price:
            logger.warning(
                f"Payment amount {data.amount} rejected for booking {booking.id} (price {booking.service.price})"
            )
            raise HTTPException(status_code=400, detail="Payment amount does not match service price")

        is_cash = data.provider.lower() == CASH_PROVIDER
        try:
            payment = self.repo.create_payment(
                self.db,
                booking_id=booking.id,
                amount=data.amount,
                currency=data.currency,
                provider=data.provider,
                provider_id=data.providerId,
                status=PaymentStatus.PAID if is_cash else PaymentStatus.PENDING,
                paid_at=utcnow() if is_cash else None,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Payment for booking {booking.id} recorded concurrently")
            raise HTTPException(status_code=409, detail=DUPLICATE_PAYMENT) from e

        payment = self.repo.get_by_id(self.db, payment.id)
        if payment.status == PaymentStatus.PAID:
            logger.info(f"Payment {payment.id} settled in cash for booking {booking.id}")
        else:
            logger.info(f"Payment {payment.id} pending with provider {payment.provider}")
        return PaymentResponse.from_model(payment)

    def list_payments(
        self,
        booking_id: Optional[str],
        business_id: Optional[str],
        status: Optional[PaymentStatus],
        page: PageParams,
        current_user: TokenPayload,
    ) -> PaymentListResponse:
        # Operators only see payments for businesses they own
        owner_id = current_user.user_id if current_user.role == UserRole.OPERATOR else None
        payments, total = self.repo.search_payments(
            self.db, booking_id, business_id, status, owner_id, page.limit, page.offset
        )
        return PaymentListResponse(
            payments=[PaymentResponse.from_model(p) for p in payments],
            pagination=build_pagination(total, page),
        )
