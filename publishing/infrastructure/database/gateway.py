"""SQLAlchemy implementation of the persistence gateway.

Every statement a repository issues passes through here. Store errors are
translated into the domain taxonomy when a unit of work ends:

    IntegrityError      -> DuplicateKeyError / ConstraintViolationError
    other SQLAlchemyError -> TransactionAbortedError

Domain exceptions raised inside a unit of work roll it back and propagate
unchanged, and so does ``asyncio.CancelledError``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from publishing.application.interfaces import DatabaseHandle, PersistenceGateway
from publishing.config import Settings
from publishing.domain.exceptions import TransactionAbortedError
from publishing.infrastructure.database.base import Base
from publishing.infrastructure.database.errors import translate_integrity_error
from publishing.infrastructure.database.session import create_engine, create_session_factory

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class SQLAlchemyDatabaseHandle(DatabaseHandle):
    """Statement operations bound to one open session and its transaction."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def execute(self, statement: Any) -> int:
        result = await self._session.execute(
            statement, execution_options={"synchronize_session": False}
        )
        return result.rowcount

    async def query_row(self, statement: Any) -> Any | None:
        result = await self._session.execute(statement)
        return result.first()

    async def query_rows(self, statement: Any) -> AsyncIterator[Any]:
        result = await self._session.execute(statement)
        for row in result:
            yield row

    async def add(self, model: ModelT) -> ModelT:
        self._session.add(model)
        await self._session.flush()
        return model


class SQLAlchemyGateway(PersistenceGateway):
    """Owns the engine; repositories share one instance."""

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory: async_sessionmaker[AsyncSession] = create_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SQLAlchemyGateway":
        return cls(create_engine(database_url, echo=echo))

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLAlchemyGateway":
        return cls.from_url(settings.database_url, echo=settings.database_echo)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_schema(self) -> None:
        """Create all tables from the ORM metadata (tests and local bootstrap)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def transaction(self, operation: str = "unit of work") -> AsyncIterator[DatabaseHandle]:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield SQLAlchemyDatabaseHandle(session)
            except IntegrityError as exc:
                logger.info("Rolled back %s: integrity error %s", operation, exc.orig)
                raise translate_integrity_error(exc) from exc
            except SQLAlchemyError as exc:
                logger.warning("Rolled back %s after store error: %s", operation, exc)
                raise TransactionAbortedError(operation, exc) from exc

    async def execute(self, statement: Any) -> int:
        async with self.transaction("execute") as db:
            return await db.execute(statement)

    async def query_row(self, statement: Any) -> Any | None:
        async with self.transaction("query_row") as db:
            return await db.query_row(statement)

    async def query_rows(self, statement: Any) -> AsyncIterator[Any]:
        async with self.transaction("query_rows") as db:
            async for row in db.query_rows(statement):
                yield row

    async def add(self, model: ModelT) -> ModelT:
        async with self.transaction("add") as db:
            return await db.add(model)
