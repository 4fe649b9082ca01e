"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from comnet.config import AuthSettings, NewsSettings, Settings
from comnet.util.di.base import ProviderBase
from comnet.util.error import ConfigurationError

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return check_settings(Settings())

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_news_settings(self, settings: Settings) -> NewsSettings:
        """Provide news settings."""
        return settings.news


def check_settings(settings: Settings) -> Settings:
    """Reject settings that are unsafe outside development.

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    if (
        settings.environment in ("staging", "production")
        and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set outside development")
    return settings
