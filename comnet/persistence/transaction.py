"""SQLAlchemy transaction control."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from comnet.domain.repository import TransactionManager


class SqlAlchemyTransactionManager(TransactionManager):
    """Commits and savepoints on the request's session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()
        logfire.debug("Session committed early")

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        # SAVEPOINT / RELEASE, or ROLLBACK TO SAVEPOINT when the block raises
        async with self.session.begin_nested():
            yield
