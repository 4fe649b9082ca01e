"""Unit tests for error translation."""

import pytest

from comnet.domain.error import (
    DomainError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    UpstreamFetchError,
)
from comnet.interface.error import AuthenticationError, to_http_exception


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (InvalidArgumentError("bad"), 400),
        (NotFoundError("Post", "123"), 404),
        (ForbiddenError("Post is locked"), 403),
        (AuthenticationError("Authentication required"), 401),
        (UpstreamFetchError("https://x", "timeout"), 400),
        (DomainError("other"), 400),
    ],
)
def test_status_codes(error, status_code):
    exc = to_http_exception(error)

    assert exc.status_code == status_code
    assert exc.detail == str(error)


def test_not_found_detail_names_resource():
    exc = to_http_exception(NotFoundError("Post", "123"))

    assert exc.detail == "Post not found: 123"
