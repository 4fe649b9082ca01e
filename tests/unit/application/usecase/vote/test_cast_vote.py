"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from comnet.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from comnet.domain.error import InvalidArgumentError, NotFoundError
from comnet.domain.repository import PostRepository
from comnet.domain.value import NetworkId, VotableType
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_returns_fresh_counters_and_user_vote(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))

        response = await use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post.id),
                user_id=str(uuid4()),
                network_id=str(network_id),
                direction=-1,
            )
        )

        assert response.score == -1
        assert response.upvotes == 0
        assert response.downvotes == 1
        assert response.user_vote == -1

    @pytest.mark.asyncio
    async def test_malformed_id_is_invalid_argument(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id="not-a-uuid",
                    user_id=str(uuid4()),
                    network_id=str(uuid4()),
                    direction=1,
                )
            )

    @pytest.mark.asyncio
    async def test_out_of_range_direction_is_invalid_argument(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))

        with pytest.raises(InvalidArgumentError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.POST,
                    votable_id=str(post.id),
                    user_id=str(uuid4()),
                    network_id=str(network_id),
                    direction=5,
                )
            )

    @pytest.mark.asyncio
    async def test_comment_target_must_exist(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.COMMENT,
                    votable_id=str(uuid4()),
                    user_id=str(uuid4()),
                    network_id=str(uuid4()),
                    direction=1,
                )
            )

    @pytest.mark.parametrize("direction", [True, "1", 1.0])
    def test_non_integer_direction_fails_validation(self, direction):
        with pytest.raises(ValidationError):
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(uuid4()),
                user_id=str(uuid4()),
                network_id=str(uuid4()),
                direction=direction,
            )
