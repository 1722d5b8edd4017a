"""Auth service - signup, login and current-user lookup"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import TokenPayload
from ...models import User
from ...security import create_access_token, hash_password, verify_password
from ..users.repository import UserRepository
from ..users.schemas import UserResponse, UserWithCounts
from .schemas import AuthResponse, LoginRequest, MeResponse, SignupRequest, TokenInfo

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
DUPLICATE_EMAIL = "User with this email already exists"


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role.value)


class AuthService:
    """Service layer for authentication"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def signup(self, data: SignupRequest) -> AuthResponse:
        """Create an account and return a signed token for it"""
        if self.repo.get_by_email(self.db, data.email):
            logger.warning("Signup rejected: email already registered")
            raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL)

        try:
            user = self.repo.create_user(
                self.db,
                name=data.name,
                email=data.email,
                password=hash_password(data.password),
                role=data.role,
                phone=data.phone,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Email taken between the check and the insert
            logger.warning("Signup lost a race on the email unique constraint")
            raise HTTPException(status_code=409, detail=DUPLICATE_EMAIL) from e

        self.db.refresh(user)
        logger.info(f"New user created: {user.id} ({user.role.value})")
        return AuthResponse(
            message="User created successfully",
            token=issue_token(user),
            user=UserResponse.from_model(user),
        )

    def login(self, data: LoginRequest) -> AuthResponse:
        """
        Verify credentials. Unknown email and wrong password produce the same
        401 so callers cannot probe which emails are registered.
        """
        user = self.repo.get_by_email(self.db, data.email)
        if not user or not verify_password(data.password, user.password):
            logger.warning("Failed login attempt")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

        logger.info(f"User logged in: {user.id}")
        return AuthResponse(
            message="Login successful",
            token=issue_token(user),
            user=UserResponse.from_model(user),
        )

    def me(self, token: TokenPayload) -> MeResponse:
        user = self.repo.get_by_id(self.db, token.user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        counts = self.repo.related_counts(self.db, [user.id])[user.id]
        return MeResponse(
            user=UserWithCounts.from_model_with_counts(user, counts),
            tokenInfo=TokenInfo(
                userId=token.user_id,
                email=token.email,
                role=token.role.value,
                issuedAt=token.issued_at,
                expiresAt=token.expires_at,
            ),
        )
