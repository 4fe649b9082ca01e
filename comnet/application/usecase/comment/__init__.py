"""Comment use cases."""

from .list_comments import (
    CommentItem,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)

__all__ = [
    "CommentItem",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
]
