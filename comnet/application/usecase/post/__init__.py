"""Post use cases."""

from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase, PostItem

__all__ = [
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "PostItem",
]
