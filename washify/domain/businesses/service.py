"""Business service - discovery and registration"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...config import DUPLICATE_BUSINESS_RADIUS_KM
from ...models import UserRole
from ...shared.geo import has_coordinates
from ...shared.pagination import PageParams, build_pagination
from ..users.repository import UserRepository
from .repository import BusinessRepository
from .schemas import BusinessCreate, BusinessListItem, BusinessListResponse, BusinessResponse

logger = logging.getLogger(__name__)

BUSINESS_OWNER_ROLES = (UserRole.OPERATOR, UserRole.ADMIN)


class BusinessService:
    """Service layer for business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BusinessRepository()
        self.users = UserRepository()

    def discover(
        self,
        lat: Optional[float],
        lng: Optional[float],
        radius_km: float,
        search: Optional[str],
        page: PageParams,
    ) -> BusinessListResponse:
        """
        Find businesses. With coordinates, results are limited to radius_km and
        ordered by distance; without, they are ordered newest first.
        """
        if has_coordinates(lat, lng):
            rows, total = self.repo.search_nearby(
                self.db, lat, lng, radius_km, search, page.limit, page.offset
            )
            counts = self.repo.booking_counts(self.db, [b.id for b, _ in rows])
            items = [
                BusinessListItem.from_model(business, counts[business.id], distance)
                for business, distance in rows
            ]
        else:
            businesses, total = self.repo.search(self.db, search, page.limit, page.offset)
            counts = self.repo.booking_counts(self.db, [b.id for b in businesses])
            items = [BusinessListItem.from_model(b, counts[b.id]) for b in businesses]

        return BusinessListResponse(businesses=items, pagination=build_pagination(total, page))

    def register(self, data: BusinessCreate, current_user: TokenPayload) -> BusinessResponse:
        owner_id = data.ownerId or current_user.user_id

        if owner_id != current_user.user_id and not current_user.is_admin:
            logger.warning(
                f"User {current_user.user_id} tried to register a business for {owner_id}"
            )
            raise HTTPException(
                status_code=403, detail="You can only register businesses for your own account"
            )

        owner = self.users.get_by_id(self.db, owner_id)
        if not owner:
            raise HTTPException(status_code=404, detail="User not found")

        if owner.role not in BUSINESS_OWNER_ROLES:
            raise HTTPException(
                status_code=403, detail="Only operators and admins can create businesses"
            )

        duplicate = self.repo.find_duplicate_nearby(
            self.db, data.name, data.lat, data.lng, DUPLICATE_BUSINESS_RADIUS_KM
        )
        if duplicate:
            logger.warning(f"Duplicate business listing rejected: {data.name!r} near existing {duplicate.id}")
            raise HTTPException(
                status_code=409, detail="A business with this name already exists at this location"
            )

        business = self.repo.create_business(
            self.db,
            name=data.name,
            address=data.address,
            lat=data.lat,
            lng=data.lng,
            owner_id=owner.id,
        )
        logger.info(f"Business {business.id} registered for owner {owner.id}")
        return BusinessResponse.from_model(business)
