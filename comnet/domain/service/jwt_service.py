"""JWT token domain service."""

from uuid import UUID

import logfire

from comnet.config import AuthSettings
from comnet.domain.value import NetworkId
from comnet.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings, default_network_id: NetworkId) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
            default_network_id: Network assumed when a token carries none
        """
        self.auth_settings = auth_settings
        self.default_network_id = default_network_id

    def create_token(
        self, user_id: str, username: str, network_id: str | None = None
    ) -> str:
        """Create JWT token for user.

        End-user tokens are issued by the external auth layer with the same
        secret; this mints tokens for operators and scheduled jobs
        (``scripts/issue_token.py``).
        """
        with logfire.span(
            "jwt_service.create_token", user_id=user_id, username=username
        ):
            token = create_token(user_id, username, network_id, self.auth_settings)
            logfire.info("JWT token created", user_id=user_id, username=username)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Extract the payload of an optional token without raising.

        Missing, invalid and expired tokens are all treated as anonymous.
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except JWTError:
            return None

    def resolve_network(self, payload: TokenPayload | None) -> NetworkId:
        """Network of the caller, falling back to the default network."""
        if payload is not None and payload.network_id:
            try:
                return NetworkId(UUID(payload.network_id))
            except ValueError:
                logfire.warn(
                    "Malformed network claim, using default network",
                    network_id=payload.network_id,
                )
        return self.default_network_id
