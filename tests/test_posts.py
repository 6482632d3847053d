"""Tests for the WordPress post adapters.

The GraphQL endpoint is mocked with ``respx``; settings are built explicitly
so the tests never depend on the process environment.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from starterkit.cms.models import FeaturedImage, PostDetail, PostSummary
from starterkit.cms.posts import (
    EMPTY_CONTENT,
    UNTITLED_POST,
    CMSError,
    find_post,
    get_post,
    list_posts,
    map_post_detail,
    map_post_summary,
    normalize_search,
    parse_page_size,
    resolve_post_url,
)
from starterkit.config import Settings

ENDPOINT = "https://cms.example.com/graphql"
ORIGIN = "https://cms.example.com"


@pytest.fixture()
def cfg() -> Settings:
    return Settings(
        wordpress_graphql_url=ENDPOINT,
        wordpress_graphql_token="token-123",
        graphql_timeout_ms=8000,
    )


def _node(**overrides) -> dict:
    node = {
        "id": "cG9zdDox",
        "databaseId": 1,
        "slug": "hello-world",
        "uri": "/blog/hello-world/",
        "title": "Hello world",
        "excerpt": "<p>Welcome</p>",
        "date": "2024-03-01T10:00:00",
        "featuredImage": {"node": {"sourceUrl": "https://img.example.com/a.png", "altText": "A"}},
        "author": {"node": {"name": "Sam"}},
    }
    node.update(overrides)
    return node


def _page_info(**overrides) -> dict:
    info = {
        "hasNextPage": True,
        "hasPreviousPage": False,
        "startCursor": "YXJyYXk6MA==",
        "endCursor": "YXJyYXk6OQ==",
    }
    info.update(overrides)
    return info


# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------

class TestParsePageSize:
    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-5"])
    def test_defaults(self, raw) -> None:
        assert parse_page_size(raw) == 10

    def test_clamps_to_maximum(self) -> None:
        assert parse_page_size("1000") == 50

    def test_valid_value(self) -> None:
        assert parse_page_size("25") == 25

    def test_leading_integer_only(self) -> None:
        assert parse_page_size("12abc") == 12

    def test_custom_bounds(self) -> None:
        assert parse_page_size(None, default=6, maximum=20) == 6
        assert parse_page_size("30", default=6, maximum=20) == 20


class TestNormalizeSearch:
    def test_trims(self) -> None:
        assert normalize_search(" hello ") == "hello"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_is_none(self, raw) -> None:
        assert normalize_search(raw) is None


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------

class TestResolvePostUrl:
    def test_relative_uri_joined_to_origin(self) -> None:
        assert (
            resolve_post_url("/blog/my-post/", "https://example.com")
            == "https://example.com/blog/my-post/"
        )

    def test_absolute_uri_unchanged(self) -> None:
        assert resolve_post_url("https://elsewhere.com/x", ORIGIN) == "https://elsewhere.com/x"

    def test_missing_uri_is_none(self) -> None:
        assert resolve_post_url(None, ORIGIN) is None
        assert resolve_post_url("", ORIGIN) is None

    def test_no_origin_returns_uri(self) -> None:
        assert resolve_post_url("/blog/x/", None) == "/blog/x/"


class TestMapping:
    def test_summary_fields(self) -> None:
        post = map_post_summary(_node(), ORIGIN)

        assert isinstance(post, PostSummary)
        assert post.database_id == 1
        assert post.post_url == "https://cms.example.com/blog/hello-world/"
        assert post.author_name == "Sam"
        assert post.featured_image == FeaturedImage(url="https://img.example.com/a.png", alt="A")

    def test_missing_author_and_image(self) -> None:
        post = map_post_summary(_node(author=None, featuredImage={"node": None}), ORIGIN)

        assert post.author_name is None
        assert post.featured_image is None

    def test_image_without_source_url(self) -> None:
        post = map_post_summary(_node(featuredImage={"node": {"altText": None}}), ORIGIN)

        assert post.featured_image == FeaturedImage(url=None, alt=None)

    def test_summary_to_dict_is_camel_case(self) -> None:
        out = map_post_summary(_node(), ORIGIN).to_dict()

        assert out["databaseId"] == 1
        assert out["postUrl"] == "https://cms.example.com/blog/hello-world/"
        assert out["authorName"] == "Sam"
        assert out["featuredImage"] == {"url": "https://img.example.com/a.png", "alt": "A"}
        assert "content" not in out

    def test_detail_defaults(self) -> None:
        post = map_post_detail(_node(title=None), ORIGIN)

        assert isinstance(post, PostDetail)
        assert post.title == UNTITLED_POST
        assert post.content == EMPTY_CONTENT

    def test_detail_content_is_sanitised(self) -> None:
        post = map_post_detail(
            _node(content="<script>alert(1)</script><p>Hi</p>"), ORIGIN
        )

        assert post.content == "<p>Hi</p>"
        assert post.to_dict()["content"] == "<p>Hi</p>"


# ---------------------------------------------------------------------------
# list_posts
# ---------------------------------------------------------------------------

class TestListPosts:
    @respx.mock
    async def test_returns_mapped_page(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200,
                json={"data": {"posts": {"nodes": [_node()], "pageInfo": _page_info()}}},
            )
        )
        page = await list_posts(cfg, first=10)

        assert [p.slug for p in page.posts] == ["hello-world"]
        assert page.page_info.has_next_page is True
        assert page.page_info.end_cursor == "YXJyYXk6OQ=="

    @respx.mock
    async def test_forwards_only_present_variables(self, cfg: Settings) -> None:
        route = respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"data": {"posts": {"nodes": [], "pageInfo": _page_info()}}}
            )
        )
        await list_posts(cfg, first=10)
        assert json.loads(route.calls.last.request.content)["variables"] == {"first": 10}

        await list_posts(cfg, first=25, after="abc", search="hello")
        assert json.loads(route.calls.last.request.content)["variables"] == {
            "first": 25,
            "after": "abc",
            "search": "hello",
        }

    @respx.mock
    async def test_sends_configured_token(self, cfg: Settings) -> None:
        route = respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"data": {"posts": {"nodes": [], "pageInfo": _page_info()}}}
            )
        )
        await list_posts(cfg, first=10)

        assert route.calls.last.request.headers["authorization"] == "Bearer token-123"

    @respx.mock
    async def test_graphql_errors_raise_with_502(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"data": None, "errors": [{"message": "Internal server error"}]}
            )
        )
        with pytest.raises(CMSError) as excinfo:
            await list_posts(cfg, first=10)

        assert excinfo.value.status_code == 502
        assert excinfo.value.details == ["Internal server error"]
        assert excinfo.value.message == "Failed to fetch posts from WordPress."

    @respx.mock
    async def test_upstream_status_propagated(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(return_value=httpx.Response(503, text="down"))
        with pytest.raises(CMSError) as excinfo:
            await list_posts(cfg, first=10)

        assert excinfo.value.status_code == 503
        assert excinfo.value.details == ["GraphQL request failed with status 503"]

    @respx.mock
    async def test_no_data_without_errors_is_502(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(200, text="ok", headers={"content-type": "text/plain"})
        )
        with pytest.raises(CMSError) as excinfo:
            await list_posts(cfg, first=10)

        assert excinfo.value.status_code == 502
        assert excinfo.value.details is None


# ---------------------------------------------------------------------------
# get_post / find_post
# ---------------------------------------------------------------------------

class TestGetPost:
    async def test_missing_slug_makes_no_request(self, cfg: Settings) -> None:
        with respx.mock(assert_all_called=False) as router:
            route = router.post(ENDPOINT)
            with pytest.raises(CMSError) as excinfo:
                await get_post(cfg, "")

        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Slug is required."
        assert not route.called

    @respx.mock
    async def test_returns_detail(self, cfg: Settings) -> None:
        route = respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200, json={"data": {"post": _node(content="<p>Body</p>")}}
            )
        )
        post = await get_post(cfg, "hello-world")

        assert json.loads(route.calls.last.request.content)["variables"] == {"slug": "hello-world"}
        assert post.content == "<p>Body</p>"
        assert post.post_url == "https://cms.example.com/blog/hello-world/"

    @respx.mock
    async def test_null_post_is_404(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(200, json={"data": {"post": None}})
        )
        with pytest.raises(CMSError) as excinfo:
            await get_post(cfg, "missing")

        assert excinfo.value.status_code == 404

    @respx.mock
    async def test_post_with_errors_uses_failure_status(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(
                200,
                json={"data": {"post": _node()}, "errors": [{"message": "partial"}]},
            )
        )
        with pytest.raises(CMSError) as excinfo:
            await get_post(cfg, "hello-world")

        assert excinfo.value.status_code == 502
        assert excinfo.value.details == ["partial"]

    @respx.mock
    async def test_find_post_returns_none_on_failure(self, cfg: Settings) -> None:
        respx.post(ENDPOINT).mock(
            return_value=httpx.Response(200, json={"data": {"post": None}})
        )
        assert await find_post(cfg, "missing") is None
