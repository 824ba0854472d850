"""
Pytest configuration for snapdi content integration tests.

Integration tests run against a temporary SQLite database.
Import the shared fixtures to make them available.
"""

import pytest_asyncio

from snapdi_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    database_url,
    db_session,
    session_maker,
    uow,
)
from tests.shared.fixtures.factories import TestAccountFactory

__all__ = [
    "async_engine",
    "database_url",
    "db_session",
    "session_maker",
    "uow",
]


@pytest_asyncio.fixture
async def author(db_session):
    """A saved photographer account that blogs can be attached to."""
    account = TestAccountFactory.photographer()
    await AccountRepositorySQLAlchemy(db_session).save(account)
    return account
