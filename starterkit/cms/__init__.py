"""Headless-CMS package — GraphQL gateway, post adapters and sanitiser."""

from starterkit.cms.graphql import GraphQLError, GraphQLRequest, GraphQLResult, request_graphql
from starterkit.cms.models import FeaturedImage, PageInfo, PostDetail, PostPage, PostSummary
from starterkit.cms.posts import CMSError, find_post, get_post, list_posts
from starterkit.cms.sanitize import sanitize_content

__all__ = [
    "request_graphql",
    "GraphQLRequest",
    "GraphQLResult",
    "GraphQLError",
    "list_posts",
    "get_post",
    "find_post",
    "CMSError",
    "sanitize_content",
    "PostSummary",
    "PostDetail",
    "PostPage",
    "PageInfo",
    "FeaturedImage",
]
