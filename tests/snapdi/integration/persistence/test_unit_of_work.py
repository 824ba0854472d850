"""Integration tests for SQLAlchemyUnitOfWork transaction boundaries."""

import pytest

from snapdi.infrastructure.persistence.sqlalchemy import SQLAlchemyUnitOfWork
from snapdi.infrastructure.persistence.sqlalchemy.models import KeywordModel
from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
    KeywordRepositorySQLAlchemy,
)


async def _keyword_count(session_maker) -> int:
    async with SQLAlchemyUnitOfWork(session_maker) as uow:
        return await KeywordRepositorySQLAlchemy(uow.session).count()


@pytest.mark.integration
class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit_persists(self, session_maker):
        async with SQLAlchemyUnitOfWork(session_maker) as uow:
            repo = KeywordRepositorySQLAlchemy(uow.session)
            await repo.add(KeywordModel(keyword="wedding"))
            await uow.commit()

        assert await _keyword_count(session_maker) == 1

    @pytest.mark.asyncio
    async def test_flushed_but_uncommitted_changes_are_discarded(self, session_maker):
        async with SQLAlchemyUnitOfWork(session_maker) as uow:
            repo = KeywordRepositorySQLAlchemy(uow.session)
            await repo.add(KeywordModel(keyword="wedding"))
            await repo.save_changes()
            # Visible inside the transaction
            assert await repo.count() == 1

        assert await _keyword_count(session_maker) == 0

    @pytest.mark.asyncio
    async def test_exception_rolls_back(self, session_maker):
        with pytest.raises(RuntimeError, match="boom"):
            async with SQLAlchemyUnitOfWork(session_maker) as uow:
                repo = KeywordRepositorySQLAlchemy(uow.session)
                await repo.add(KeywordModel(keyword="portrait"))
                await repo.save_changes()
                raise RuntimeError("boom")

        assert await _keyword_count(session_maker) == 0

    @pytest.mark.asyncio
    async def test_explicit_rollback(self, session_maker):
        async with SQLAlchemyUnitOfWork(session_maker) as uow:
            repo = KeywordRepositorySQLAlchemy(uow.session)
            await repo.add(KeywordModel(keyword="kept"))
            await uow.commit()
            await repo.add(KeywordModel(keyword="dropped"))
            await repo.save_changes()
            await uow.rollback()

        assert await _keyword_count(session_maker) == 1

    @pytest.mark.asyncio
    async def test_session_outside_context_raises(self, session_maker):
        uow = SQLAlchemyUnitOfWork(session_maker)

        with pytest.raises(RuntimeError, match="not active"):
            _ = uow.session

        async with uow:
            assert uow.session is not None

        with pytest.raises(RuntimeError):
            _ = uow.session
