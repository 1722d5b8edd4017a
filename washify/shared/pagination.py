"""Pagination helpers shared by every list endpoint"""

from pydantic import BaseModel

from ..config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    hasMore: bool


class PageParams(BaseModel):
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0


def page_params(limit: int | None, offset: int | None, default_limit: int = DEFAULT_PAGE_LIMIT) -> PageParams:
    """Clamp raw query values into a usable window"""
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, MAX_PAGE_LIMIT))
    offset = max(0, offset or 0)
    return PageParams(limit=limit, offset=offset)


def build_pagination(total: int, params: PageParams) -> Pagination:
    return Pagination(
        total=total,
        limit=params.limit,
        offset=params.offset,
        hasMore=params.offset + params.limit < total,
    )
