from .repository import UserRepository
from .schemas import UserResponse, UserWithCounts

__all__ = ["UserRepository", "UserResponse", "UserWithCounts"]
