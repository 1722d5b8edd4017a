"""Admin domain schemas"""

from pydantic import BaseModel

from ...shared.pagination import Pagination
from ..users.schemas import UserWithCounts


class UserListResponse(BaseModel):
    users: list[UserWithCounts]
    stats: dict[str, int]
    pagination: Pagination


class DeletedUser(BaseModel):
    id: str
    name: str
    email: str
    role: str


class DeleteUserResponse(BaseModel):
    message: str
    deletedUser: DeletedUser
