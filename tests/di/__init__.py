"""Mock providers for testing."""

from .feeds import MockFeedsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockFeedsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
