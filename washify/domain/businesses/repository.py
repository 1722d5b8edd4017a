"""Business repository - Database operations for businesses"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Booking, Business
from ...shared.geo import distance_km_expr
from ...shared.validators import LIKE_ESCAPE, contains_pattern


class BusinessRepository:
    """Repository for business database operations"""

    @staticmethod
    def get_by_id(db: Session, business_id: str) -> Optional[Business]:
        return db.query(Business).filter(Business.id == business_id).first()

    @staticmethod
    def _apply_search(query, search: Optional[str]):
        if search:
            search_term = contains_pattern(search)
            query = query.filter(
                or_(
                    Business.name.ilike(search_term, escape=LIKE_ESCAPE),
                    Business.address.ilike(search_term, escape=LIKE_ESCAPE),
                )
            )
        return query

    @staticmethod
    def _with_details(query):
        return query.options(joinedload(Business.owner), selectinload(Business.services))

    @classmethod
    def search_nearby(
        cls,
        db: Session,
        lat: float,
        lng: float,
        radius_km: float,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[tuple[Business, float]], int]:
        """
        Businesses within radius_km of (lat, lng), nearest first.
        Returns (business, distance_km) pairs and the total match count.
        """
        distance = distance_km_expr(lat, lng, Business.lat, Business.lng)

        base = cls._apply_search(db.query(Business).filter(distance <= radius_km), search)
        total = base.count()

        rows = (
            cls._with_details(
                cls._apply_search(
                    db.query(Business, distance.label("distance")).filter(distance <= radius_km),
                    search,
                )
            )
            .order_by(distance.asc(), Business.id)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return [(business, float(dist)) for business, dist in rows], total

    @classmethod
    def search(
        cls,
        db: Session,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Business], int]:
        """Text-filtered businesses, newest first"""
        base = cls._apply_search(db.query(Business), search)
        total = base.count()
        businesses = (
            cls._with_details(base)
            .order_by(Business.created_at.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return businesses, total

    @staticmethod
    def booking_counts(db: Session, business_ids: list[str]) -> dict[str, int]:
        counts = {business_id: 0 for business_id in business_ids}
        if not business_ids:
            return counts
        rows = (
            db.query(Booking.business_id, func.count(Booking.id))
            .filter(Booking.business_id.in_(business_ids))
            .group_by(Booking.business_id)
            .all()
        )
        counts.update(dict(rows))
        return counts

    @staticmethod
    def find_duplicate_nearby(
        db: Session, name: str, lat: float, lng: float, radius_km: float
    ) -> Optional[Business]:
        """A business with exactly this name within radius_km, if any"""
        distance = distance_km_expr(lat, lng, Business.lat, Business.lng)
        return (
            db.query(Business)
            .filter(Business.name == name, distance <= radius_km)
            .first()
        )

    @staticmethod
    def create_business(db: Session, **business_data) -> Business:
        business = Business(**business_data)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business
