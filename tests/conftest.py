"""Root pytest configuration.

Test Structure:
    tests/
    ├── snapdi/                # Content domain (keywords, blogs, paging)
    │   ├── unit/              # Fast, isolated tests
    │   └── integration/       # Tests against a temporary SQLite database
    ├── snapdi_identity/       # Identity domain (accounts, auth, tokens)
    │   ├── unit/
    │   └── integration/
    ├── cross_domain/          # Flows spanning both domains
    │   └── e2e/
    ├── integration/api/       # HTTP tests through FastAPI's TestClient
    └── shared/                # Shared fixtures and utilities

Environment:
    Settings are read from config/.env.dev (or config/.env) when present.
    JWT_SECRET_KEY and DATABASE_URL_OVERRIDE fall back to test values so
    that get_settings() works on a clean checkout.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from snapdi_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only-0123456789")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


@pytest.fixture(autouse=True)
def configure_app_settings():
    """Give every test freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
