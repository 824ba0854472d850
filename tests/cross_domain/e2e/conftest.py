"""
Pytest configuration for cross-domain end-to-end tests.

Each step of a flow runs in its own committed unit of work, the way
separate HTTP requests would.
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
