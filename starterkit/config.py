"""Centralised settings for the starter kit backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_WORDPRESS_GRAPHQL_URL = "https://dev-wp-nextjs-starter-be.pantheonsite.io/graphql"


@dataclass(frozen=True)
class Settings:
    # ------------------------------------------------------------------
    # WordPress GraphQL
    # ------------------------------------------------------------------
    wordpress_graphql_url: str = field(
        default_factory=lambda: os.environ.get("WORDPRESS_GRAPHQL_URL")
        or DEFAULT_WORDPRESS_GRAPHQL_URL
    )
    wordpress_graphql_token: str | None = field(
        default_factory=lambda: os.environ.get("WORDPRESS_GRAPHQL_TOKEN") or None
    )
    graphql_timeout_ms: int = field(
        default_factory=lambda: int(os.environ.get("GRAPHQL_TIMEOUT_MS", "8000"))
    )

    @property
    def wordpress_base_origin(self) -> str | None:
        """``scheme://host[:port]`` of the GraphQL endpoint, or ``None``."""
        parts = urlsplit(self.wordpress_graphql_url)
        if not parts.scheme or not parts.netloc:
            return None
        # Drop any user:password@ prefix, an origin never carries credentials.
        host = parts.netloc.rpartition("@")[2]
        return f"{parts.scheme}://{host}"

    # ------------------------------------------------------------------
    # Post listing
    # ------------------------------------------------------------------
    default_page_size: int = field(
        default_factory=lambda: int(os.environ.get("POSTS_DEFAULT_PAGE_SIZE", "10"))
    )
    max_page_size: int = field(
        default_factory=lambda: int(os.environ.get("POSTS_MAX_PAGE_SIZE", "50"))
    )
    listing_page_size: int = field(
        default_factory=lambda: int(os.environ.get("POSTS_LISTING_PAGE_SIZE", "6"))
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "8000")))


# Module-level singleton, read once at import time:
#   from starterkit.config import settings
settings = Settings()
