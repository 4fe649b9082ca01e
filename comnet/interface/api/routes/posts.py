"""Post and comment listing routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from comnet.application.usecase.comment import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from comnet.application.usecase.post import (
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from comnet.domain.error import DomainError
from comnet.domain.service import JWTService
from comnet.domain.value import CommentSortOrder, PostSortOrder
from comnet.interface.api.auth import resolve_caller
from comnet.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: PostSortOrder = Query(default=PostSortOrder.NEW),
    community_id: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListPostsResponse:
    """List the posts of the caller's network.

    Authentication is optional; when present each post carries the
    caller's vote.
    """
    caller = resolve_caller(jwt_service, auth_token, authorization)
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                network_id=caller.network_id,
                sort=sort,
                community_id=community_id,
                page=page,
                limit=limit,
                user_id=caller.user_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetPostResponse:
    """Get a single post of the caller's network."""
    caller = resolve_caller(jwt_service, auth_token, authorization)
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=post_id,
                network_id=caller.network_id,
                user_id=caller.user_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}/comments", response_model=ListCommentsResponse)
async def list_comments(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: CommentSortOrder = Query(default=CommentSortOrder.NEW),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListCommentsResponse:
    """List the comments of a post."""
    caller = resolve_caller(jwt_service, auth_token, authorization)
    try:
        return await list_comments_use_case.execute(
            ListCommentsRequest(
                post_id=post_id,
                network_id=caller.network_id,
                sort=sort,
                page=page,
                limit=limit,
                user_id=caller.user_id,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
