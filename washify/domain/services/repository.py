"""Service repository - Database operations for the services a business offers"""

from typing import Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload

from ...models import Booking, Service, ServiceTier

# BASIC first, then PREMIUM, then LUXURY
TIER_ORDER = case(
    (Service.tier == ServiceTier.BASIC, 0),
    (Service.tier == ServiceTier.PREMIUM, 1),
    (Service.tier == ServiceTier.LUXURY, 2),
    else_=3,
)


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_for_business(db: Session, service_id: str, business_id: str) -> Optional[Service]:
        """A service only if it belongs to the given business"""
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.business_id == business_id)
            .first()
        )

    @staticmethod
    def get_by_name(db: Session, business_id: str, name: str) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.business_id == business_id, Service.name == name)
            .first()
        )

    @staticmethod
    def search_services(
        db: Session,
        business_id: Optional[str] = None,
        tier: Optional[ServiceTier] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Service], int]:
        query = db.query(Service)
        if business_id:
            query = query.filter(Service.business_id == business_id)
        if tier:
            query = query.filter(Service.tier == tier)
        if min_price is not None:
            query = query.filter(Service.price >= min_price)
        if max_price is not None:
            query = query.filter(Service.price <= max_price)

        total = query.count()
        services = (
            query.options(joinedload(Service.business))
            .order_by(TIER_ORDER, Service.price.asc(), Service.id)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return services, total

    @staticmethod
    def booking_counts(db: Session, service_ids: list[str]) -> dict[str, int]:
        counts = {service_id: 0 for service_id in service_ids}
        if not service_ids:
            return counts
        rows = (
            db.query(Booking.service_id, func.count(Booking.id))
            .filter(Booking.service_id.in_(service_ids))
            .group_by(Booking.service_id)
            .all()
        )
        counts.update(dict(rows))
        return counts

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        """Stage a new service; the caller commits"""
        service = Service(**service_data)
        db.add(service)
        db.flush()
        return service
