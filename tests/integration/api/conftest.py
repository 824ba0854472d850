"""Pytest fixtures for API integration tests.

Each test gets its own SQLite file. Tables and seed accounts are created in a
fresh event loop before the app starts, so they never share a loop with the
TestClient.
"""

import asyncio
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from snapdi.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyUnitOfWork,
    create_engine_from_url,
    create_session_maker,
)
from snapdi.infrastructure.persistence.sqlalchemy.models import Base
from snapdi.presentation.api.app import API_V1_PREFIX, create_app
from snapdi.presentation.api.dependencies import get_email_dispatcher
from snapdi_config.settings import Settings
from snapdi_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
)

# Re-export shared fixtures
from tests.shared.fixtures.database import database_url
from tests.shared.fixtures.email import RecordingEmailDispatcher
from tests.shared.fixtures.factories import TestAccountFactory

__all__ = ["database_url"]

PASSWORD = TestAccountFactory.PASSWORD


@dataclass
class ApiUser:
    """A registered, verified and logged-in user as seen by a client."""

    id: int
    email: str
    access_token: str
    refresh_token: str
    body: dict = field(default_factory=dict)

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


def run_db(database_url: str, action):
    """Run ``action(session)`` in a fresh event loop and commit.

    Parameters
    ----------
    database_url
        The test database the app is (or will be) using
    action
        Async callable receiving an AsyncSession
    """

    async def _run():
        engine = create_engine_from_url(database_url)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with SQLAlchemyUnitOfWork(create_session_maker(engine)) as uow:
                result = await action(uow.session)
                await uow.commit()
                return result
        finally:
            await engine.dispose()

    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(_run())
    finally:
        loop.close()


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        # Required security settings
        jwt_secret_key=SecretStr("api-test-jwt-secret-for-testing-only-0123"),
        database_url_override=database_url,
        bcrypt_rounds=10,
        # API settings
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:5173",
        smtp_enabled=False,
    )


@pytest.fixture
def email_dispatcher() -> RecordingEmailDispatcher:
    return RecordingEmailDispatcher()


@pytest.fixture
def seed(database_url):
    """Run an async ``action(session)`` against the test database and commit."""

    def _seed(action):
        return run_db(database_url, action)

    return _seed


@pytest.fixture
def admin_account(database_url):
    """Seed an active, verified admin before the app starts."""

    async def _seed(session):
        account = TestAccountFactory.admin()
        await AccountRepositorySQLAlchemy(session).save(account)
        return account

    return run_db(database_url, _seed)


@pytest.fixture
def test_client(api_settings, email_dispatcher, admin_account):
    """Create a test client running the app's lifespan."""
    app = create_app(settings=api_settings)

    # Record emails instead of sending them
    app.dependency_overrides[get_email_dispatcher] = lambda: email_dispatcher

    with TestClient(app) as client:
        yield client


@pytest.fixture
def login(test_client, api_v1_prefix):
    """Log in and return the token response body."""

    def _login(email_or_phone: str, password: str = PASSWORD) -> dict:
        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email_or_phone": email_or_phone, "password": password},
        )
        assert response.status_code == 200, (
            f"Login failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _login


@pytest.fixture
def signup(test_client, api_v1_prefix, email_dispatcher, login):
    """Register, verify and log in a user through the API."""

    def _signup(
        email: str,
        role: str = "customer",
        password: str = PASSWORD,
        **extra,
    ) -> ApiUser:
        response = test_client.post(
            f"{api_v1_prefix}/auth/register",
            json={
                "name": extra.pop("name", email.split("@")[0].title()),
                "email": email,
                "password": password,
                "role": role,
                **extra,
            },
        )
        assert response.status_code == 201, (
            f"Registration failed: {response.status_code} - {response.text}"
        )
        token = email_dispatcher.last_token("verification", email)
        verified = test_client.get(
            f"{api_v1_prefix}/auth/verify-email",
            params={"token": token},
        )
        assert verified.status_code == 200, verified.text

        body = login(email, password)
        return ApiUser(
            id=body["user"]["id"],
            email=email,
            access_token=body["access_token"],
            refresh_token=body["refresh_token"],
            body=body,
        )

    return _signup


@pytest.fixture
def admin(test_client, login, admin_account) -> ApiUser:
    """The seeded admin, logged in."""
    body = login(admin_account.email)
    return ApiUser(
        id=body["user"]["id"],
        email=admin_account.email,
        access_token=body["access_token"],
        refresh_token=body["refresh_token"],
        body=body,
    )


@pytest.fixture
def customer(signup) -> ApiUser:
    return signup("customer@example.com", phone="+84 912 345 678")


@pytest.fixture
def photographer(signup) -> ApiUser:
    return signup("photographer@example.com", role="photographer")
