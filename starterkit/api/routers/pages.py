"""Server-rendered WordPress pages.

Routes
------
GET /wordpress?search=<term>&after=<cursor>    Post listing with search
GET /wordpress/{slug}                          Single post
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from starterkit.api.params import ParamSource, resolve_slug
from starterkit.api.rendering import render
from starterkit.cms.models import PostPage
from starterkit.cms.posts import CMSError, find_post, list_posts, normalize_search

router = APIRouter()


def _not_found() -> HTMLResponse:
    return HTMLResponse(render("not_found.html"), status_code=404)


@router.get("", response_class=HTMLResponse)
async def posts_page(
    request: Request,
    search: Optional[str] = None,
    after: Optional[str] = None,
) -> HTMLResponse:
    """Render one page of the post listing."""
    settings = request.app.state.settings
    term = normalize_search(search)
    page = PostPage()
    error = None
    status_code = 200

    try:
        page = await list_posts(
            settings,
            first=settings.listing_page_size,
            after=after or None,
            search=term,
        )
    except CMSError as exc:
        error = exc.message
        status_code = exc.status_code

    next_url = None
    if page.page_info.has_next_page and page.page_info.end_cursor:
        params = {"after": page.page_info.end_cursor}
        if term:
            params["search"] = term
        next_url = f"/wordpress?{urlencode(params)}"

    html = render(
        "posts.html",
        posts=page.posts,
        search=term or "",
        error=error,
        next_url=next_url,
    )
    return HTMLResponse(html, status_code=status_code)


@router.get("/{slug}", response_class=HTMLResponse)
async def post_page(request: Request) -> HTMLResponse:
    """Render a single post, or the not-found page when it can't be loaded."""
    slug = await resolve_slug(ParamSource(request.path_params))
    post = await find_post(request.app.state.settings, slug)
    if post is None:
        return _not_found()
    return HTMLResponse(render("post.html", post=post))
