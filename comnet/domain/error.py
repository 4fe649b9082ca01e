"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidArgumentError(DomainError):
    """Raised when a request carries a malformed or out-of-range value."""

    pass


class ForbiddenError(DomainError):
    """Raised when an operation is not permitted on the target.

    Example: voting on a locked post.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found or not visible."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UpstreamFetchError(DomainError):
    """Raised when an external feed cannot be fetched or parsed.

    Covers network errors, timeouts, non-success HTTP status and malformed
    documents. Always recoverable: feed services convert it into a
    per-source error annotation.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Feed could not be loaded: {reason}")
