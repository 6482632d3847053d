"""WordPress post adapters built on :mod:`starterkit.cms.graphql`.

Public entry points
-------------------
``list_posts``: one page of published posts, newest first, optionally
filtered by a search term.
``get_post``: a single post looked up by slug.

Both raise :class:`CMSError` when the upstream call fails or yields nothing;
the HTTP layer turns that into an ``{"error", "details"}`` response.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urljoin

from starterkit.cms.graphql import GraphQLRequest, GraphQLResult, request_graphql
from starterkit.cms.models import FeaturedImage, PageInfo, PostDetail, PostPage, PostSummary
from starterkit.cms.sanitize import sanitize_content
from starterkit.config import Settings

UNTITLED_POST = "Untitled post"
EMPTY_CONTENT = "<p>No content available.</p>"

# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

POSTS_QUERY = """
  query WordPressPosts($first: Int!, $after: String, $search: String) {
    posts(
      first: $first
      after: $after
      where: {
        search: $search
        orderby: { field: DATE, order: DESC }
        status: PUBLISH
      }
    ) {
      nodes {
        id
        databaseId
        slug
        uri
        title
        excerpt
        date
        featuredImage {
          node {
            sourceUrl
            altText
          }
        }
        author {
          node {
            name
          }
        }
      }
      pageInfo {
        hasNextPage
        hasPreviousPage
        startCursor
        endCursor
      }
    }
  }
"""

POST_QUERY = """
  query WordPressPostBySlug($slug: ID!) {
    post(id: $slug, idType: SLUG) {
      id
      databaseId
      slug
      uri
      title
      excerpt
      content
      date
      featuredImage {
        node {
          sourceUrl
          altText
        }
      }
      author {
        node {
          name
        }
      }
    }
  }
"""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class CMSError(Exception):
    """An upstream CMS call failed or returned nothing usable."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

def parse_page_size(raw: str | None, default: int = 10, maximum: int = 50) -> int:
    """Parse a ``first`` query parameter.

    Only the leading integer counts (``"25abc"`` → 25).  Missing, unparsable
    and non-positive values fall back to *default*; anything above *maximum*
    is clamped.
    """
    if not raw:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    parsed = int(match.group(1))
    if parsed <= 0:
        return default
    return min(parsed, maximum)


def normalize_search(raw: str | None) -> str | None:
    if raw is None:
        return None
    return raw.strip() or None


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------

def resolve_post_url(uri: str | None, origin: str | None) -> str | None:
    """Turn a WordPress ``uri`` into an absolute URL.

    Absolute URIs pass through untouched; relative ones are resolved against
    *origin* (and returned as-is when no origin is known).
    """
    if not uri:
        return None
    if uri.startswith("http"):
        return uri
    if origin:
        return urljoin(origin, uri)
    return uri


def _nested_node(raw: dict[str, Any], key: str) -> dict[str, Any] | None:
    wrapper = raw.get(key)
    if not isinstance(wrapper, dict):
        return None
    node = wrapper.get("node")
    return node if isinstance(node, dict) else None


def _summary_fields(raw: dict[str, Any], origin: str | None) -> dict[str, Any]:
    author = _nested_node(raw, "author")
    image = _nested_node(raw, "featuredImage")
    return {
        "id": raw.get("id"),
        "database_id": raw.get("databaseId"),
        "slug": raw.get("slug"),
        "uri": raw.get("uri"),
        "post_url": resolve_post_url(raw.get("uri"), origin),
        "title": raw.get("title"),
        "excerpt": raw.get("excerpt"),
        "date": raw.get("date"),
        "author_name": author.get("name") if author else None,
        "featured_image": (
            FeaturedImage(url=image.get("sourceUrl"), alt=image.get("altText"))
            if image is not None
            else None
        ),
    }


def map_post_summary(raw: dict[str, Any], origin: str | None) -> PostSummary:
    return PostSummary(**_summary_fields(raw, origin))


def map_post_detail(raw: dict[str, Any], origin: str | None) -> PostDetail:
    """Map a single-post node, filling in title/content defaults and
    sanitising the body."""
    fields = _summary_fields(raw, origin)
    if fields["title"] is None:
        fields["title"] = UNTITLED_POST
    content = raw.get("content")
    if content is None:
        content = EMPTY_CONTENT
    return PostDetail(**fields, content=sanitize_content(content))


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

def _request(settings: Settings, query: str, variables: dict[str, Any]) -> GraphQLRequest:
    return GraphQLRequest(
        endpoint=settings.wordpress_graphql_url,
        query=query,
        variables=variables,
        token=settings.wordpress_graphql_token,
        timeout_ms=settings.graphql_timeout_ms,
        cache="no-store",
    )


def _failure_status(result: GraphQLResult[Any]) -> int:
    return result.status if result.status >= 400 else 502


async def list_posts(
    settings: Settings,
    first: int,
    after: str | None = None,
    search: str | None = None,
) -> PostPage:
    """Fetch one page of posts.

    Raises:
        CMSError: When the gateway returned no data, any GraphQL errors, or a
            payload without a ``posts`` connection.
    """
    variables: dict[str, Any] = {"first": first}
    if after:
        variables["after"] = after
    if search:
        variables["search"] = search

    result = await request_graphql(_request(settings, POSTS_QUERY, variables))

    connection = result.data.get("posts") if isinstance(result.data, dict) else None
    if result.errors or not isinstance(connection, dict):
        print(f"[posts] list failed (status {result.status}): {result.error_messages}")
        raise CMSError(
            "Failed to fetch posts from WordPress.",
            _failure_status(result),
            result.error_messages,
        )

    origin = settings.wordpress_base_origin
    nodes = connection.get("nodes") or []
    return PostPage(
        posts=[map_post_summary(node, origin) for node in nodes],
        page_info=PageInfo.from_dict(connection.get("pageInfo")),
    )


async def get_post(settings: Settings, slug: str | None) -> PostDetail:
    """Fetch the post identified by *slug*.

    Raises:
        CMSError: 400 for a missing slug (no request is made), 404 when the
            post does not exist, or the upstream failure status when a post
            came back alongside GraphQL errors.
    """
    if not slug:
        raise CMSError("Slug is required.", 400)

    result = await request_graphql(_request(settings, POST_QUERY, {"slug": slug}))

    post = result.data.get("post") if isinstance(result.data, dict) else None
    if not isinstance(post, dict) or result.errors:
        print(f"[posts] {slug!r} unavailable (status {result.status}): {result.error_messages}")
        raise CMSError(
            "Post not found or failed to fetch from WordPress.",
            _failure_status(result) if post else 404,
            result.error_messages,
        )

    return map_post_detail(post, settings.wordpress_base_origin)


async def find_post(settings: Settings, slug: str | None) -> PostDetail | None:
    """Like :func:`get_post` but returns ``None`` instead of raising."""
    try:
        return await get_post(settings, slug)
    except CMSError:
        return None
