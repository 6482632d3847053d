"""Dataclass DTOs for WordPress posts.

These are read-only projections of the upstream CMS objects, built fresh for
every request.  ``to_dict`` produces the camelCase shape served by the JSON
routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FeaturedImage:
    url: str | None
    alt: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "alt": self.alt}


@dataclass(frozen=True)
class PostSummary:
    id: str | None
    database_id: int | None
    slug: str | None
    uri: str | None
    post_url: str | None
    title: str | None
    excerpt: str | None
    date: str | None
    author_name: str | None
    featured_image: FeaturedImage | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "databaseId": self.database_id,
            "slug": self.slug,
            "uri": self.uri,
            "postUrl": self.post_url,
            "title": self.title,
            "excerpt": self.excerpt,
            "date": self.date,
            "authorName": self.author_name,
            "featuredImage": self.featured_image.to_dict() if self.featured_image else None,
        }


@dataclass(frozen=True)
class PostDetail(PostSummary):
    content: str = ""

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["content"] = self.content
        return out


@dataclass(frozen=True)
class PageInfo:
    has_next_page: bool
    has_previous_page: bool
    start_cursor: str | None = None
    end_cursor: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> PageInfo:
        raw = raw or {}
        return cls(
            has_next_page=bool(raw.get("hasNextPage", False)),
            has_previous_page=bool(raw.get("hasPreviousPage", False)),
            start_cursor=raw.get("startCursor"),
            end_cursor=raw.get("endCursor"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
            "startCursor": self.start_cursor,
            "endCursor": self.end_cursor,
        }


@dataclass(frozen=True)
class PostPage:
    posts: list[PostSummary] = field(default_factory=list)
    page_info: PageInfo = field(default_factory=lambda: PageInfo(False, False))

    def to_dict(self) -> dict[str, Any]:
        return {
            "posts": [p.to_dict() for p in self.posts],
            "pageInfo": self.page_info.to_dict(),
        }
