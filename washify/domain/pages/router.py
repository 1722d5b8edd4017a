"""Page router - server-rendered home page and dashboard"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from ...auth import TokenPayload, payload_from_token
from ...config import TOKEN_COOKIE_NAME
from ...database import get_db
from ...security import extract_bearer_token
from ..users.repository import UserRepository
from .service import DashboardService
from .templates import render_dashboard, render_home

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


def page_identity(request: Request) -> Optional[TokenPayload]:
    """Signed-in identity from the Authorization header or the session cookie"""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        token = request.cookies.get(TOKEN_COOKIE_NAME)
    if not token:
        return None
    try:
        return payload_from_token(token)
    except HTTPException:
        return None


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def home(identity: Optional[TokenPayload] = Depends(page_identity)):
    if identity:
        return RedirectResponse(url="/dashboard", status_code=302)
    return HTMLResponse(render_home())


@router.get("/dashboard", response_class=HTMLResponse, include_in_schema=False)
def dashboard(
    identity: Optional[TokenPayload] = Depends(page_identity),
    db: Session = Depends(get_db),
):
    if not identity:
        return RedirectResponse(url="/", status_code=302)

    user = UserRepository.get_by_id(db, identity.user_id)
    if not user:
        logger.warning(f"Dashboard requested with token for missing user {identity.user_id}")
        return RedirectResponse(url="/", status_code=302)

    stats = DashboardService(db).stats_for(user)
    return HTMLResponse(render_dashboard(user.name, user.role.value, stats.cards()))
