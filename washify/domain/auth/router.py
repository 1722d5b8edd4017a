"""Auth router - signup, login and current user"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import TokenPayload, require_user
from ...database import get_db
from .schemas import AuthResponse, LoginRequest, MeResponse, SignupRequest
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(data: SignupRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new account"""
    return service.signup(data)


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token"""
    return service.login(data)


@router.get("/me", response_model=MeResponse)
def me(
    current_user: TokenPayload = Depends(require_user),
    service: AuthService = Depends(get_auth_service),
):
    """Current user with related counts and token metadata"""
    return service.me(current_user)
