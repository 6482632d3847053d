"""Jinja2 environment and template filters for the HTML post pages."""

from __future__ import annotations

import re
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
_TAG_RE = re.compile(r"<[^>]*>")

EXCERPT_LIMIT = 260


def format_date(value: str | None) -> str:
    """Render an ISO date as ``M/D/YYYY``; ``"Unknown date"`` otherwise."""
    if not value:
        return "Unknown date"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "Unknown date"
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def plain_excerpt(excerpt: str | None) -> str:
    """Strip tags from an excerpt and cut it to :data:`EXCERPT_LIMIT` chars."""
    if not excerpt:
        return "No excerpt provided."
    return _TAG_RE.sub("", excerpt)[:EXCERPT_LIMIT]


@lru_cache(maxsize=1)
def get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["format_date"] = format_date
    env.filters["plain_excerpt"] = plain_excerpt
    return env


def render(template_name: str, **context: Any) -> str:
    return get_env().get_template(template_name).render(**context)
