"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    database_url,
    db_session,
    session_maker,
    uow,
)
from tests.shared.fixtures.email import RecordingEmailDispatcher, SentEmail
from tests.shared.fixtures.factories import TestAccountFactory, hashed

__all__ = [
    "RecordingEmailDispatcher",
    "SentEmail",
    "TestAccountFactory",
    "async_engine",
    "database_url",
    "db_session",
    "hashed",
    "session_maker",
    "uow",
]
