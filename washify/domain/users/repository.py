"""User repository - Database operations for users"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import Booking, Business, Review, User, UserRole
from ...shared.validators import LIKE_ESCAPE, contains_pattern


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        """Stage a new user; the caller commits"""
        user = User(**user_data)
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        """Delete a user and, through ORM cascades, everything they own"""
        db.delete(user)
        db.commit()

    @staticmethod
    def _filtered_query(db: Session, role: Optional[UserRole] = None, search: Optional[str] = None):
        query = db.query(User)
        if role:
            query = query.filter(User.role == role)
        if search:
            search_term = contains_pattern(search)
            query = query.filter(
                or_(
                    User.name.ilike(search_term, escape=LIKE_ESCAPE),
                    User.email.ilike(search_term, escape=LIKE_ESCAPE),
                )
            )
        return query

    @classmethod
    def search_users(
        cls,
        db: Session,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[User], int]:
        """Filter users by role and name/email substring, newest first"""
        query = cls._filtered_query(db, role, search)
        total = query.count()
        users = query.order_by(User.created_at.desc()).limit(limit).offset(offset).all()
        return users, total

    @staticmethod
    def role_counts(db: Session) -> dict[str, int]:
        """Number of users per role across the whole platform"""
        rows = db.query(User.role, func.count(User.id)).group_by(User.role).all()
        return {role.value: count for role, count in rows}

    @staticmethod
    def related_counts(db: Session, user_ids: list[str]) -> dict[str, dict[str, int]]:
        """Owned business, booking and review counts keyed by user id"""
        counts = {
            user_id: {"ownedBusinesses": 0, "bookings": 0, "reviews": 0} for user_id in user_ids
        }
        if not user_ids:
            return counts

        sources = (
            ("ownedBusinesses", Business.owner_id, Business.id),
            ("bookings", Booking.user_id, Booking.id),
            ("reviews", Review.user_id, Review.id),
        )
        for key, owner_column, id_column in sources:
            rows = (
                db.query(owner_column, func.count(id_column))
                .filter(owner_column.in_(user_ids))
                .group_by(owner_column)
                .all()
            )
            for user_id, count in rows:
                counts[user_id][key] = count
        return counts
