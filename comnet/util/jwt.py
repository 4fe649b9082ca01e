"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from comnet.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload.

    ``network_id`` is absent for tokens issued before networks existed.
    """

    user_id: str
    username: str
    network_id: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    username: str,
    network_id: str | None,
    settings: AuthSettings,
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        username: Username
        network_id: Network the user belongs to
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "username": username,
        "exp": expiry,
    }
    if network_id is not None:
        payload["network_id"] = network_id

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload(**payload)
    except ValueError:
        raise JWTError("Invalid token payload")
