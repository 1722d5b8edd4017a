"""Booking router - create, list and update bookings"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_user
from ...config import DEFAULT_BOOKING_PAGE_LIMIT
from ...database import get_db
from ...models import BookingStatus
from ...shared.pagination import page_params
from .schemas import BookingCreate, BookingListResponse, BookingResponse, BookingUpdate
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", response_model=BookingResponse, status_code=201)
def create_booking(
    data: BookingCreate,
    current_user: TokenPayload = Depends(require_user),
    service: BookingService = Depends(get_booking_service),
):
    """Book a car wash service"""
    return service.create_booking(data, current_user)


@router.get("", response_model=BookingListResponse)
def list_bookings(
    userId: Optional[str] = Query(None),
    businessId: Optional[str] = Query(None),
    status: Optional[BookingStatus] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    current_user: TokenPayload = Depends(require_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_bookings(
        userId,
        businessId,
        status,
        page_params(limit, offset, default_limit=DEFAULT_BOOKING_PAGE_LIMIT),
        current_user,
    )


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    data: BookingUpdate,
    current_user: TokenPayload = Depends(require_user),
    service: BookingService = Depends(get_booking_service),
):
    """Change a booking's status, notes or photos"""
    return service.update_booking(booking_id, data, current_user)
