"""Payment router - record and list payments"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_operator, require_user
from ...database import get_db
from ...models import PaymentStatus
from ...shared.pagination import page_params
from .schemas import PaymentCreate, PaymentListResponse, PaymentResponse
from .service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


@router.post("", response_model=PaymentResponse, status_code=201)
def create_payment(
    data: PaymentCreate,
    current_user: TokenPayload = Depends(require_user),
    service: PaymentService = Depends(get_payment_service),
):
    """Pay for a booking"""
    return service.create_payment(data, current_user)


@router.get("", response_model=PaymentListResponse)
def list_payments(
    bookingId: Optional[str] = Query(None),
    businessId: Optional[str] = Query(None),
    status: Optional[PaymentStatus] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    current_user: TokenPayload = Depends(require_operator),
    service: PaymentService = Depends(get_payment_service),
):
    return service.list_payments(
        bookingId, businessId, status, page_params(limit, offset), current_user
    )
