"""Infrastructure providers."""

# Import bases
from .feeds import FeedsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .feeds import ProdFeedsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "FeedsProvider",
    "PersistenceProvider",
    "ProdFeedsProvider",
    "ProdPersistenceProvider",
]
