"""Engine construction and the request-scoped unit of work."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)


def create_engine_from_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a database URL.

    SQLite connections are opened per checkout (NullPool) so that an engine
    can be shared across event loops, e.g. by tests and TestClient.
    """
    if database_url.startswith("sqlite"):
        db_path = database_url.split("///")[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(database_url, echo=echo, poolclass=NullPool)

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


class SQLAlchemyUnitOfWork:
    """One transaction over one session.

    Repositories are built on ``uow.session`` and only flush. Nothing is
    persisted until ``commit`` is called; leaving the context with an
    exception, or without committing, rolls back.

    Examples
    --------
    >>> async with SQLAlchemyUnitOfWork(session_maker) as uow:
    ...     repo = KeywordRepositorySQLAlchemy(uow.session)
    ...     await repo.add(KeywordModel(keyword="wedding"))
    ...     await uow.commit()
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker
        self._session: AsyncSession | None = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            msg = "Unit of work is not active; use 'async with'"
            raise RuntimeError(msg)
        return self._session

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        self._session = self._session_maker()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self.session
        try:
            if exc_type is not None:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            await session.rollback()
        finally:
            await session.close()
            self._session = None

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
