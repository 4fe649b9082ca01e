"""RSS/Atom feed adapter."""

from .client import HttpRssFeedClient, MockRssFeedClient, RssFeedClient

__all__ = ["RssFeedClient", "HttpRssFeedClient", "MockRssFeedClient"]
