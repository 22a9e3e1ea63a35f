"""Persistence gateway port: the only path from repositories to the store."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from typing import Any, TypeVar

ModelT = TypeVar("ModelT")


class DatabaseHandle(ABC):
    """Statement-level operations against the store."""

    @abstractmethod
    async def execute(self, statement: Any) -> int:
        """Run a data-modifying statement and return the number of rows affected."""
        ...

    @abstractmethod
    async def query_row(self, statement: Any) -> Any | None:
        """Run a query and return its first row, or None when it matched nothing."""
        ...

    @abstractmethod
    def query_rows(self, statement: Any) -> AsyncIterator[Any]:
        """Run a query and iterate its rows once. The iterator cannot be restarted."""
        ...

    @abstractmethod
    async def add(self, model: ModelT) -> ModelT:
        """Insert a mapped row and return it with generated columns populated."""
        ...


class PersistenceGateway(DatabaseHandle):
    """Process-wide gateway shared by every repository.

    Statement methods called directly on the gateway each run in their own
    short transaction. Multi-statement work goes through ``transaction()``.
    """

    @abstractmethod
    def transaction(self, operation: str = "unit of work") -> AbstractAsyncContextManager[DatabaseHandle]:
        """Open a unit of work named ``operation`` for logs and errors.

        Commits when the block exits normally and rolls back on any exception,
        cancellation included.
        """
        ...
