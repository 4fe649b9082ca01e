"""In-memory transaction manager for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from comnet.domain.repository import TransactionManager


class InMemoryTransactionManager(TransactionManager):
    """Records transaction boundaries; in-memory writes are never undone."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            self.rollbacks += 1
            raise
