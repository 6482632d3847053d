"""FastAPI application factory.

Lifespan
--------
Nothing is opened at startup: every CMS call creates and closes its own HTTP
client.  The lifespan hook only reports which GraphQL endpoint is in use.

Routers
-------

    /api/wordpress/posts   — JSON post listing and single-post lookup
    /wordpress             — server-rendered listing and post pages

Configuration lives on ``app.state.settings`` so tests can pass their own
:class:`~starterkit.config.Settings`.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from starterkit.api.routers import pages as pages_router
from starterkit.api.routers import posts as posts_router
from starterkit.cms.posts import CMSError
from starterkit.config import Settings, settings as default_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    print(f"[startup] WordPress GraphQL endpoint: {app.state.settings.wordpress_graphql_url}")
    yield


async def cms_error_handler(request: Request, exc: CMSError) -> JSONResponse:
    body: dict[str, Any] = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(body, status_code=exc.status_code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Starter Kit API",
        description=(
            "Backend for the starter kit demo site. Proxies a WordPress "
            "GraphQL API and serves post listings and pages."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or default_settings

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CMSError, cms_error_handler)  # type: ignore[arg-type]

    app.include_router(posts_router.router, prefix="/api/wordpress/posts", tags=["posts"])
    app.include_router(pages_router.router, prefix="/wordpress", tags=["pages"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn starterkit.api.app:app --reload
app = create_app()
