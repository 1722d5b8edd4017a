"""Booking service - creation, listing and status lifecycle"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import BOOKING_TRANSITIONS, Booking, BookingStatus, UserRole
from ...shared.pagination import PageParams, build_pagination
from ..businesses.repository import BusinessRepository
from ..services.repository import ServiceRepository
from ..users.repository import UserRepository
from .repository import BookingRepository
from .schemas import BookingCreate, BookingListResponse, BookingResponse, BookingUpdate

logger = logging.getLogger(__name__)

SLOT_TAKEN = "Time slot is already booked"


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.users = UserRepository()
        self.businesses = BusinessRepository()
        self.services = ServiceRepository()

    def create_booking(self, data: BookingCreate, current_user: TokenPayload) -> BookingResponse:
        """
        Book a service at a business for a given time.

        The slot check and the insert share one transaction; the partial
        unique index on active slots settles any race between them.
        """
        user_id = data.userId or current_user.user_id
        if user_id != current_user.user_id and not current_user.is_admin:
            logger.warning(f"User {current_user.user_id} tried to book on behalf of {user_id}")
            raise HTTPException(status_code=403, detail="You can only create bookings for yourself")

        if not self.users.get_by_id(self.db, user_id):
            raise HTTPException(status_code=404, detail="User not found")

        if not self.businesses.get_by_id(self.db, data.businessId):
            raise HTTPException(status_code=404, detail="Business not found")

        if not self.services.get_for_business(self.db, data.serviceId, data.businessId):
            raise HTTPException(
                status_code=404, detail="Service not found or does not belong to this business"
            )

        if self.repo.find_active_at(self.db, data.businessId, data.scheduledAt):
            logger.warning(
                f"Slot conflict for business {data.businessId} at {data.scheduledAt.isoformat()}"
            )
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

        try:
            booking = self.repo.create_booking(
                self.db,
                user_id=user_id,
                business_id=data.businessId,
                service_id=data.serviceId,
                scheduled_at=data.scheduledAt,
                notes=data.notes,
                photos=data.photos or [],
                status=BookingStatus.PENDING,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Slot for business {data.businessId} taken concurrently")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e

        logger.info(f"Booking {booking.id} created for user {user_id} at business {data.businessId}")
        return BookingResponse.from_model(self.repo.get_by_id(self.db, booking.id))

    def list_bookings(
        self,
        user_id: Optional[str],
        business_id: Optional[str],
        status: Optional[BookingStatus],
        page: PageParams,
        current_user: TokenPayload,
    ) -> BookingListResponse:
        """
        List bookings visible to the caller.

        Customers see only their own bookings. Operators see bookings at the
        businesses they own, or their own bookings when they filter on
        themselves. Admins see everything.
        """
        owner_id = None
        if current_user.role == UserRole.CUSTOMER:
            user_id = current_user.user_id
        elif current_user.role == UserRole.OPERATOR and user_id != current_user.user_id:
            owner_id = current_user.user_id

        bookings, total = self.repo.search_bookings(
            self.db, user_id, business_id, status, owner_id, page.limit, page.offset
        )
        return BookingListResponse(
            bookings=[BookingResponse.from_model(b) for b in bookings],
            pagination=build_pagination(total, page),
        )

    def update_booking(
        self, booking_id: str, data: BookingUpdate, current_user: TokenPayload
    ) -> BookingResponse:
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        is_customer = booking.user_id == current_user.user_id
        is_manager = current_user.is_admin or booking.business.owner_id == current_user.user_id
        if not (is_customer or is_manager):
            logger.warning(f"User {current_user.user_id} denied access to booking {booking.id}")
            raise HTTPException(status_code=403, detail="You do not have access to this booking")

        if data.status is not None and data.status != booking.status:
            self._check_transition(booking, data.status, is_manager)
            booking.status = data.status

        # Explicit null clears the notes
        if "notes" in data.model_fields_set:
            booking.notes = data.notes
        if data.photos is not None:
            booking.photos = data.photos

        self.db.commit()
        logger.info(f"Booking {booking.id} updated by {current_user.user_id} (status {booking.status.value})")
        return BookingResponse.from_model(self.repo.get_by_id(self.db, booking.id))

    @staticmethod
    def _check_transition(booking: Booking, new_status: BookingStatus, is_manager: bool) -> None:
        if new_status not in BOOKING_TRANSITIONS[booking.status]:
            raise HTTPException(
                status_code=400,
                detail=f"Cannot change booking status from {booking.status.value} to {new_status.value}",
            )
        if not is_manager and new_status != BookingStatus.CANCELLED:
            raise HTTPException(status_code=403, detail="Customers can only cancel their bookings")
