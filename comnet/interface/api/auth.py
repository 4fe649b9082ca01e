"""Caller identity for API routes."""

from dataclasses import dataclass

from comnet.domain.service import JWTService
from comnet.interface.error import AuthenticationError

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class Caller:
    """Identity of the current request.

    ``user_id`` is None for anonymous requests; the network always resolves.
    """

    user_id: str | None
    network_id: str


def extract_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Pick the JWT from the auth cookie, else from a Bearer header."""
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :].strip()
        return token or None
    return None


def resolve_caller(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
    required: bool = False,
) -> Caller:
    """Resolve the caller of a request.

    Args:
        jwt_service: JWT service
        auth_token: Token from the ``auth_token`` cookie
        authorization: ``Authorization`` header value
        required: Reject anonymous callers

    Raises:
        AuthenticationError: If required and the token is missing or invalid
    """
    payload = jwt_service.get_payload_from_token(
        extract_token(auth_token, authorization)
    )
    if payload is None and required:
        raise AuthenticationError("Authentication required")

    return Caller(
        user_id=payload.user_id if payload else None,
        network_id=str(jwt_service.resolve_network(payload)),
    )
