"""Vote routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel, StrictInt

from comnet.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from comnet.domain.error import DomainError
from comnet.domain.service import JWTService
from comnet.domain.value import VotableType
from comnet.interface.api.auth import resolve_caller
from comnet.interface.error import AuthenticationError, to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VoteAPIRequest(BaseModel):
    """API request for casting a vote (-1 down, 0 retract, 1 up)."""

    vote_type: StrictInt


async def _cast(
    votable_type: VotableType,
    votable_id: str,
    body: VoteAPIRequest,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> CastVoteResponse:
    try:
        caller = resolve_caller(jwt_service, auth_token, authorization, required=True)
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=votable_type,
                votable_id=votable_id,
                user_id=caller.user_id,
                network_id=caller.network_id,
                direction=body.vote_type,
            )
        )
    except (AuthenticationError, DomainError) as e:
        logfire.warn(
            "Vote rejected",
            votable_type=votable_type.value,
            votable_id=votable_id,
            error=str(e),
        )
        raise to_http_exception(e)


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: str,
    body: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Cast, change or retract a vote on a post.

    Requires authentication.

    Returns:
        Updated counters of the post and the caller's current vote
    """
    return await _cast(
        VotableType.POST,
        post_id,
        body,
        cast_vote_use_case,
        jwt_service,
        auth_token,
        authorization,
    )


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def vote_on_comment(
    comment_id: str,
    body: VoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Cast, change or retract a vote on a comment.

    Requires authentication.
    """
    return await _cast(
        VotableType.COMMENT,
        comment_id,
        body,
        cast_vote_use_case,
        jwt_service,
        auth_token,
        authorization,
    )
