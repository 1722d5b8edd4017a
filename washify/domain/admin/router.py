"""Admin router - user management (ADMIN only)"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_admin
from ...database import get_db
from ...models import UserRole
from ...shared.pagination import page_params
from .schemas import DeleteUserResponse, UserListResponse
from .service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    """Dependency injection for AdminService"""
    return AdminService(db)


@router.get("/users", response_model=UserListResponse)
def list_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None),
    limit: Optional[int] = Query(None),
    offset: Optional[int] = Query(None),
    _admin: TokenPayload = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """List users with role/search filters and per-role totals"""
    return service.list_users(role, search, page_params(limit, offset))


@router.delete("/users", response_model=DeleteUserResponse)
def delete_user(
    userId: Optional[str] = Query(None),
    admin: TokenPayload = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """Delete a user by id (cannot delete yourself)"""
    return service.delete_user(userId, admin)
