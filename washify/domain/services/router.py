"""Service router - public catalog and service creation"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, optional_auth, require_operator
from ...database import get_db
from ...models import ServiceTier
from ...shared.pagination import page_params
from .schemas import ServiceCreate, ServiceListResponse, ServiceResponse
from .service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=ServiceListResponse)
def list_services(
    businessId: Optional[str] = Query(None),
    tier: Optional[ServiceTier] = Query(None),
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    _user: Optional[TokenPayload] = Depends(optional_auth),
    service: CatalogService = Depends(get_catalog_service),
):
    """List services, cheapest tier first"""
    return service.list_services(
        businessId, tier, minPrice, maxPrice, page_params(limit, offset)
    )


@router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
    data: ServiceCreate,
    current_user: TokenPayload = Depends(require_operator),
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a service for a business you own"""
    return service.create_service(data, current_user)
