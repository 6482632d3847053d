"""WordPress post commands: query the CMS straight from the terminal."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer

from starterkit.cms.posts import CMSError, get_post, list_posts, normalize_search, parse_page_size
from starterkit.config import settings

posts_app = typer.Typer(help="Query WordPress posts through the GraphQL gateway.")


def _fail(prefix: str, exc: CMSError) -> None:
    typer.echo(f"[{prefix}] {exc.message} (status {exc.status_code})")
    for detail in exc.details or []:
        typer.echo(f"  - {detail}")
    raise typer.Exit(code=1)


@posts_app.command("list")
def posts_list(
    first: Optional[str] = typer.Option(None, help="Page size (default 10, max 50)."),
    after: Optional[str] = typer.Option(None, help="Cursor from a previous page."),
    search: Optional[str] = typer.Option(None, help="Free-text search filter."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
) -> None:
    """List published posts, newest first."""
    try:
        page = asyncio.run(
            list_posts(
                settings,
                first=parse_page_size(first, settings.default_page_size, settings.max_page_size),
                after=after or None,
                search=normalize_search(search),
            )
        )
    except CMSError as exc:
        _fail("posts list", exc)
        return

    if as_json:
        typer.echo(json.dumps(page.to_dict(), indent=2))
        return

    if not page.posts:
        typer.echo("[posts list] No posts found.")
        return
    for post in page.posts:
        typer.echo(f"  {post.slug or '-'}  {post.date or '-'}  {post.title!r}")
    if page.page_info.has_next_page and page.page_info.end_cursor:
        typer.echo(f"[posts list] More posts: --after {page.page_info.end_cursor}")


@posts_app.command("show")
def posts_show(
    slug: str = typer.Argument(..., help="Slug of the post."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON payload."),
) -> None:
    """Show a single post by slug."""
    try:
        post = asyncio.run(get_post(settings, slug))
    except CMSError as exc:
        _fail("posts show", exc)
        return

    if as_json:
        typer.echo(json.dumps({"post": post.to_dict()}, indent=2))
        return

    typer.echo(f"[posts show] Title  : {post.title}")
    typer.echo(f"[posts show] Date   : {post.date or '(none)'}")
    typer.echo(f"[posts show] Author : {post.author_name or '(none)'}")
    typer.echo(f"[posts show] URL    : {post.post_url or '(none)'}")
    typer.echo("")
    typer.echo(post.content)
