"""Dashboard service - per-role headline statistics"""

import logging
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import distinct, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Booking, Business, Payment, PaymentStatus, Review, Service, User, UserRole
from .templates import format_currency

logger = logging.getLogger(__name__)


class BusinessStats(BaseModel):
    """Stats for operators (their businesses) and admins (the whole platform)"""

    totalBookings: int = 0
    totalRevenue: float = 0.0
    activeCustomers: int = 0
    activeServices: int = 0

    def cards(self) -> list[tuple[str, str]]:
        return [
            ("Total Bookings", str(self.totalBookings)),
            ("Total Revenue", format_currency(self.totalRevenue)),
            ("Active Customers", str(self.activeCustomers)),
            ("Services", str(self.activeServices)),
        ]


class CustomerStats(BaseModel):
    totalBookings: int = 0
    totalSpent: float = 0.0
    businessesVisited: int = 0
    reviewsWritten: int = 0

    def cards(self) -> list[tuple[str, str]]:
        return [
            ("My Bookings", str(self.totalBookings)),
            ("Total Spent", format_currency(self.totalSpent)),
            ("Businesses Visited", str(self.businessesVisited)),
            ("Reviews Written", str(self.reviewsWritten)),
        ]


class DashboardService:
    """Service layer for the dashboard page"""

    def __init__(self, db: Session):
        self.db = db

    def stats_for(self, user: User):
        """
        Headline numbers for the given user's role.

        A failing query never breaks the page: the error is logged and the
        dashboard shows zeros.
        """
        try:
            if user.role == UserRole.CUSTOMER:
                return self._customer_stats(user.id)
            owner_id = user.id if user.role == UserRole.OPERATOR else None
            return self._business_stats(owner_id)
        except SQLAlchemyError:
            logger.exception(f"Error computing dashboard stats for user {user.id}")
            self.db.rollback()
            return CustomerStats() if user.role == UserRole.CUSTOMER else BusinessStats()

    def _business_stats(self, owner_id: Optional[str]) -> BusinessStats:
        bookings = self.db.query(Booking).join(Business, Booking.business_id == Business.id)
        revenue = (
            self.db.query(func.coalesce(func.sum(Payment.amount), 0.0))
            .select_from(Payment)
            .join(Booking, Payment.booking_id == Booking.id)
            .join(Business, Booking.business_id == Business.id)
            .filter(Payment.status == PaymentStatus.PAID)
        )
        customers = (
            self.db.query(func.count(distinct(Booking.user_id)))
            .select_from(Booking)
            .join(Business, Booking.business_id == Business.id)
        )
        services = self.db.query(Service).join(Business, Service.business_id == Business.id)

        if owner_id:
            bookings = bookings.filter(Business.owner_id == owner_id)
            revenue = revenue.filter(Business.owner_id == owner_id)
            customers = customers.filter(Business.owner_id == owner_id)
            services = services.filter(Business.owner_id == owner_id)

        return BusinessStats(
            totalBookings=bookings.count(),
            totalRevenue=float(revenue.scalar() or 0),
            activeCustomers=customers.scalar() or 0,
            activeServices=services.count(),
        )

    def _customer_stats(self, user_id: str) -> CustomerStats:
        spent = (
            self.db.query(func.coalesce(func.sum(Payment.amount), 0.0))
            .select_from(Payment)
            .join(Booking, Payment.booking_id == Booking.id)
            .filter(Booking.user_id == user_id, Payment.status == PaymentStatus.PAID)
            .scalar()
        )
        return CustomerStats(
            totalBookings=self.db.query(Booking).filter(Booking.user_id == user_id).count(),
            totalSpent=float(spent or 0),
            businessesVisited=self.db.query(func.count(distinct(Booking.business_id)))
            .filter(Booking.user_id == user_id)
            .scalar()
            or 0,
            reviewsWritten=self.db.query(Review).filter(Review.user_id == user_id).count(),
        )
