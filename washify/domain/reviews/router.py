"""Review router - post and browse reviews"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_user
from ...database import get_db
from ...shared.pagination import page_params
from .schemas import ReviewCreate, ReviewListResponse, ReviewResponse
from .service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.post("", response_model=ReviewResponse, status_code=201)
def create_review(
    data: ReviewCreate,
    current_user: TokenPayload = Depends(require_user),
    service: ReviewService = Depends(get_review_service),
):
    """Review a completed booking"""
    return service.create_review(data, current_user)


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    businessId: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    minRating: Optional[int] = Query(None, ge=1, le=5),
    maxRating: Optional[int] = Query(None, ge=1, le=5),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    service: ReviewService = Depends(get_review_service),
):
    """Public review listing, with the business average when filtering by business"""
    return service.list_reviews(
        businessId, userId, minRating, maxRating, page_params(limit, offset)
    )
