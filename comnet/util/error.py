"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when settings are unusable for the current environment."""

    pass


class DependencyInjectionError(UtilError):
    """Raised when no provider implementation matches a request."""

    pass
