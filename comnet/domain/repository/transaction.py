"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Explicit transaction control over the request's repositories.

    A request normally commits once when its scope closes. Batch work uses
    this to make progress durable as it goes and to confine a failure to
    the unit of work that caused it.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit everything written so far and start a new transaction."""
        pass

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Context in which an exception undoes only the enclosed writes.

        The exception is re-raised; earlier writes of the transaction stay.
        """
        pass
