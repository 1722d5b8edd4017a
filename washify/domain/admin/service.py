"""Admin service - user management for administrators"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import UserRole
from ...shared.pagination import PageParams, build_pagination
from ..users.repository import UserRepository
from ..users.schemas import UserWithCounts
from .schemas import DeletedUser, DeleteUserResponse, UserListResponse

logger = logging.getLogger(__name__)


class AdminService:
    """Service layer for admin user management"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def list_users(
        self, role: Optional[UserRole], search: Optional[str], page: PageParams
    ) -> UserListResponse:
        users, total = self.repo.search_users(self.db, role, search, page.limit, page.offset)
        counts = self.repo.related_counts(self.db, [u.id for u in users])

        return UserListResponse(
            users=[UserWithCounts.from_model_with_counts(u, counts[u.id]) for u in users],
            stats=self.repo.role_counts(self.db),
            pagination=build_pagination(total, page),
        )

    def delete_user(self, user_id: Optional[str], admin: TokenPayload) -> DeleteUserResponse:
        """Delete a user; their businesses, bookings and reviews go with them"""
        if not user_id:
            raise HTTPException(status_code=400, detail="User ID is required")

        if user_id == admin.user_id:
            logger.warning(f"Admin {admin.user_id} attempted to delete their own account")
            raise HTTPException(status_code=400, detail="Cannot delete your own account")

        target = self.repo.get_by_id(self.db, user_id)
        if not target:
            raise HTTPException(status_code=404, detail="User not found")

        deleted = DeletedUser(
            id=target.id,
            name=target.name,
            email=target.email,
            role=target.role.value,
        )
        self.repo.delete_user(self.db, target)
        logger.info(f"Admin {admin.user_id} deleted user {deleted.id} ({deleted.role})")

        return DeleteUserResponse(message="User deleted successfully", deletedUser=deleted)
