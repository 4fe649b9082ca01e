"""Unit tests for VoteService."""

from uuid import uuid4

import pytest

from comnet.domain.error import ForbiddenError, InvalidArgumentError, NotFoundError
from comnet.domain.repository import CommentRepository, PostRepository, VoteRepository
from comnet.domain.service import VoteService
from comnet.domain.value import (
    CommentId,
    NetworkId,
    PostId,
    UserId,
    VotableType,
    VoteDirection,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def counters(entity) -> tuple[int, int, int]:
    return entity.score, entity.upvotes, entity.downvotes


class TestCastVoteOnPost:
    """Tests for voting on posts."""

    @pytest.mark.asyncio
    async def test_vote_sequence_recomputes_counters(self, unit_env):
        """Up, down from another user, then retract the first vote."""
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))
        u1, u2 = UserId(uuid4()), UserId(uuid4())

        outcome = await vote_service.cast_vote(
            u1, network_id, VotableType.POST, post.id, 1
        )
        assert counters(outcome.tally) == (1, 1, 0)
        assert outcome.user_vote == VoteDirection.UP

        outcome = await vote_service.cast_vote(
            u2, network_id, VotableType.POST, post.id, -1
        )
        assert counters(outcome.tally) == (0, 1, 1)

        outcome = await vote_service.cast_vote(
            u1, network_id, VotableType.POST, post.id, 0
        )
        assert counters(outcome.tally) == (-1, 0, 1)
        assert outcome.user_vote == VoteDirection.NONE

        stored = await post_repo.find_by_id(post.id)
        assert counters(stored) == (-1, 0, 1)

    @pytest.mark.asyncio
    async def test_same_direction_twice_keeps_one_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, network_id, VotableType.POST, post.id, 1)
        outcome = await vote_service.cast_vote(
            user_id, network_id, VotableType.POST, post.id, 1
        )

        votes = await vote_repo.find_by_votable(VotableType.POST, post.id)
        assert len(votes) == 1
        assert votes[0].direction == VoteDirection.UP
        assert counters(outcome.tally) == (1, 1, 0)

    @pytest.mark.asyncio
    async def test_switching_direction_replaces_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))
        user_id = UserId(uuid4())

        await vote_service.cast_vote(user_id, network_id, VotableType.POST, post.id, 1)
        outcome = await vote_service.cast_vote(
            user_id, network_id, VotableType.POST, post.id, -1
        )

        votes = await vote_repo.find_by_votable(VotableType.POST, post.id)
        assert [v.direction for v in votes] == [VoteDirection.DOWN]
        assert counters(outcome.tally) == (-1, 0, 1)

    @pytest.mark.asyncio
    async def test_retract_without_vote_leaves_no_row(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))
        user_id = UserId(uuid4())

        outcome = await vote_service.cast_vote(
            user_id, network_id, VotableType.POST, post.id, 0
        )

        assert await vote_repo.find_by_user_and_votable(
            user_id, VotableType.POST, post.id
        ) is None
        assert counters(outcome.tally) == (0, 0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("direction", [2, -2, True])
    async def test_invalid_direction_is_rejected(self, unit_env, direction):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))

        with pytest.raises(InvalidArgumentError):
            await vote_service.cast_vote(
                UserId(uuid4()), network_id, VotableType.POST, post.id, direction
            )

    @pytest.mark.asyncio
    async def test_post_of_other_network_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        post = await post_repo.save(make_post(NetworkId(uuid4())))

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()), NetworkId(uuid4()), VotableType.POST, post.id, 1
            )

    @pytest.mark.asyncio
    async def test_missing_post_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()),
                NetworkId(uuid4()),
                VotableType.POST,
                PostId(uuid4()),
                1,
            )

    @pytest.mark.asyncio
    async def test_locked_post_is_forbidden(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id, is_locked=True))

        with pytest.raises(ForbiddenError):
            await vote_service.cast_vote(
                UserId(uuid4()), network_id, VotableType.POST, post.id, 1
            )
        assert await vote_repo.find_by_votable(VotableType.POST, post.id) == []


class TestCastVoteOnComment:
    """Tests for voting on comments."""

    @pytest.mark.asyncio
    async def test_comment_counters_follow_votes(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id))
        comment = await comment_repo.save(make_comment(post.id))

        await vote_service.cast_vote(
            UserId(uuid4()), network_id, VotableType.COMMENT, comment.id, 1
        )
        await vote_service.cast_vote(
            UserId(uuid4()), network_id, VotableType.COMMENT, comment.id, 1
        )

        stored = await comment_repo.find_by_id(comment.id)
        assert counters(stored) == (2, 2, 0)

        # Post counters are untouched by comment votes
        stored_post = await post_repo.find_by_id(post.id)
        assert counters(stored_post) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_comment_of_other_network_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        post = await post_repo.save(make_post(NetworkId(uuid4())))
        comment = await comment_repo.save(make_comment(post.id))

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()), NetworkId(uuid4()), VotableType.COMMENT, comment.id, 1
            )

    @pytest.mark.asyncio
    async def test_missing_comment_is_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()),
                NetworkId(uuid4()),
                VotableType.COMMENT,
                CommentId(uuid4()),
                -1,
            )

    @pytest.mark.asyncio
    async def test_comment_on_locked_post_is_forbidden(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        network_id = NetworkId(uuid4())
        post = await post_repo.save(make_post(network_id, is_locked=True))
        comment = await comment_repo.save(make_comment(post.id))

        with pytest.raises(ForbiddenError):
            await vote_service.cast_vote(
                UserId(uuid4()), network_id, VotableType.COMMENT, comment.id, 1
            )


class TestGetUserVotes:
    """Tests for batch vote lookup."""

    @pytest.mark.asyncio
    async def test_unvoted_items_map_to_none(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)

        network_id = NetworkId(uuid4())
        voted = await post_repo.save(make_post(network_id))
        unvoted = await post_repo.save(make_post(network_id))
        user_id = UserId(uuid4())

        await vote_service.cast_vote(
            user_id, network_id, VotableType.POST, voted.id, -1
        )

        votes = await vote_service.get_user_votes(
            user_id, VotableType.POST, [voted.id, unvoted.id]
        )

        assert votes == {voted.id: VoteDirection.DOWN, unvoted.id: VoteDirection.NONE}

    @pytest.mark.asyncio
    async def test_empty_input_returns_empty_mapping(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_user_votes(UserId(uuid4()), VotableType.POST, []) == {}
