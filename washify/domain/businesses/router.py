"""Business router - discovery (public) and registration (operators/admins)"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_operator
from ...config import DEFAULT_SEARCH_RADIUS_KM
from ...database import get_db
from ...shared.pagination import page_params
from .schemas import BusinessCreate, BusinessListResponse, BusinessResponse
from .service import BusinessService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/businesses", tags=["Businesses"])


def get_business_service(db: Session = Depends(get_db)) -> BusinessService:
    """Dependency injection for BusinessService"""
    return BusinessService(db)


@router.get("", response_model=BusinessListResponse)
def discover_businesses(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: float = Query(DEFAULT_SEARCH_RADIUS_KM, gt=0, description="Search radius in km"),
    search: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    service: BusinessService = Depends(get_business_service),
):
    """Discover car wash businesses, optionally around a location"""
    return service.discover(lat, lng, radius, search, page_params(limit, offset))


@router.post("", response_model=BusinessResponse, status_code=201)
def register_business(
    data: BusinessCreate,
    current_user: TokenPayload = Depends(require_operator),
    service: BusinessService = Depends(get_business_service),
):
    """Register a new car wash business"""
    return service.register(data, current_user)
