"""Catalog service - business logic for the services a business offers"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import ServiceTier
from ...shared.pagination import PageParams, build_pagination
from ..businesses.repository import BusinessRepository
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceListResponse, ServiceResponse

logger = logging.getLogger(__name__)

DUPLICATE_SERVICE = "A service with this name already exists for this business"


class CatalogService:
    """Service layer for business service listings"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()
        self.businesses = BusinessRepository()

    def list_services(
        self,
        business_id: Optional[str],
        tier: Optional[ServiceTier],
        min_price: Optional[float],
        max_price: Optional[float],
        page: PageParams,
    ) -> ServiceListResponse:
        services, total = self.repo.search_services(
            self.db, business_id, tier, min_price, max_price, page.limit, page.offset
        )
        counts = self.repo.booking_counts(self.db, [s.id for s in services])
        return ServiceListResponse(
            services=[ServiceResponse.from_model(s, counts[s.id]) for s in services],
            pagination=build_pagination(total, page),
        )

    def create_service(self, data: ServiceCreate, current_user: TokenPayload) -> ServiceResponse:
        """Add a service; only the business owner or an admin may do so"""
        business = self.businesses.get_by_id(self.db, data.businessId)
        if not business:
            raise HTTPException(status_code=404, detail="Business not found")

        if business.owner_id != current_user.user_id and not current_user.is_admin:
            logger.warning(
                f"User {current_user.user_id} tried to add a service to business {business.id}"
            )
            raise HTTPException(
                status_code=403, detail="You can only create services for businesses you own"
            )

        if self.repo.get_by_name(self.db, business.id, data.name):
            raise HTTPException(status_code=409, detail=DUPLICATE_SERVICE)

        try:
            service = self.repo.create_service(
                self.db,
                business_id=business.id,
                name=data.name,
                description=data.description,
                price=data.price,
                duration=data.duration,
                tier=data.tier,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Service name {data.name!r} taken concurrently for business {business.id}")
            raise HTTPException(status_code=409, detail=DUPLICATE_SERVICE) from e

        self.db.refresh(service)
        logger.info(f"Service {service.id} created for business {business.id}")
        return ServiceResponse.from_model(service)
