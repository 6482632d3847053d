"""WordPress post JSON endpoints.

Routes
------
GET /api/wordpress/posts?first=10&after=<cursor>&search=<term>
GET /api/wordpress/posts/{slug}

Failures raise :class:`~starterkit.cms.posts.CMSError`; the handler
registered in ``app.py`` renders it as ``{"error": ..., "details": [...]}``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from starterkit.api.params import ParamSource, resolve_slug
from starterkit.cms.posts import get_post, list_posts, normalize_search, parse_page_size

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class FeaturedImageOut(BaseModel):
    url: Optional[str] = None
    alt: Optional[str] = None


class PostSummaryOut(BaseModel):
    id: Optional[str] = None
    databaseId: Optional[int] = None
    slug: Optional[str] = None
    uri: Optional[str] = None
    postUrl: Optional[str] = None
    title: Optional[str] = None
    excerpt: Optional[str] = None
    date: Optional[str] = None
    authorName: Optional[str] = None
    featuredImage: Optional[FeaturedImageOut] = None


class PostDetailOut(PostSummaryOut):
    content: str


class PageInfoOut(BaseModel):
    hasNextPage: bool
    hasPreviousPage: bool
    startCursor: Optional[str] = None
    endCursor: Optional[str] = None


class PostListResponse(BaseModel):
    posts: list[PostSummaryOut]
    pageInfo: PageInfoOut


class PostResponse(BaseModel):
    post: PostDetailOut


class ErrorResponse(BaseModel):
    error: str
    details: Optional[list[str]] = None


_ERRORS: dict[int | str, dict[str, Any]] = {
    "4XX": {"model": ErrorResponse},
    "5XX": {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("", response_model=PostListResponse, responses=_ERRORS)
async def list_posts_endpoint(
    request: Request,
    first: Optional[str] = None,
    after: Optional[str] = None,
    search: Optional[str] = None,
) -> dict[str, Any]:
    """List published posts, newest first.

    Args:
        first: Page size; defaults to 10 and is capped at 50.
        after: Opaque ``endCursor`` from a previous page.
        search: Free-text filter (trimmed; blank means no filter).
    """
    settings = request.app.state.settings
    page = await list_posts(
        settings,
        first=parse_page_size(first, settings.default_page_size, settings.max_page_size),
        after=after or None,
        search=normalize_search(search),
    )
    return page.to_dict()


@router.get("/{slug}", response_model=PostResponse, responses=_ERRORS)
async def get_post_endpoint(request: Request) -> dict[str, Any]:
    """Fetch a single post by slug."""
    slug = await resolve_slug(ParamSource(request.path_params))
    post = await get_post(request.app.state.settings, slug)
    return {"post": post.to_dict()}
