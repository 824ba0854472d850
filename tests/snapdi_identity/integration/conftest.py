"""
Pytest configuration for snapdi_identity integration tests.

Integration tests run against a temporary SQLite database.
Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    database_url,
    db_session,
    session_maker,
    uow,
)

__all__ = [
    "async_engine",
    "database_url",
    "db_session",
    "session_maker",
    "uow",
]
