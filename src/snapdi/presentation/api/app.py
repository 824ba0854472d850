"""Assemble the Snapdi FastAPI application.

Versioned endpoints live under ``/api/v1``; ``/health`` stays unversioned
for probes. The app owns its engine: tables are created on startup and the
pool is disposed on shutdown.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snapdi.infrastructure.persistence.sqlalchemy import (
    create_engine_from_url,
    create_session_maker,
)
from snapdi.infrastructure.persistence.sqlalchemy.models import Base
from snapdi.presentation.api.exception_handlers import setup_exception_handlers
from snapdi.presentation.api.routers import (
    auth_router,
    blogs_router,
    keywords_router,
    users_router,
)
from snapdi.presentation.api.schemas import HealthResponse
from snapdi_config.settings import Settings, get_settings

# Puts the users and password_reset_tokens tables on Base.metadata
from snapdi_identity.infrastructure.persistence.sqlalchemy import (  # noqa: F401
    models as identity_models,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

_OWN_LOGGERS = ("snapdi", "snapdi_identity", "snapdi_config")
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg", "httpx", "httpcore")

# (router, path prefix, OpenAPI tag)
_V1_ROUTES = (
    (auth_router, "/auth", "Authentication"),
    (users_router, "/users", "Users"),
    (blogs_router, "/blogs", "Blogs"),
    (keywords_router, "/keywords", "Keywords"),
)

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": (
            "Registration, login by email or phone, token refresh and logout, "
            "email verification and password reset. Access tokens are HS256 "
            "JWTs; refresh tokens are opaque and single use."
        ),
    },
    {
        "name": "Users",
        "description": (
            "Account administration. Roles are `customer`, `photographer` "
            "and `admin`; listings support search, filters and sorting."
        ),
    },
    {
        "name": "Blogs",
        "description": (
            "Blog posts, newest first, with keyword tagging. Batch keyword "
            "changes apply completely or not at all."
        ),
    },
    {"name": "Keywords", "description": "Names are unique, ignoring case."},
    {"name": "Health", "description": "Liveness probe."},
]


@lru_cache(maxsize=1)
def _configure_logging(level_name: str = "INFO") -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in _OWN_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    engine = app.state.engine
    logger.info("Snapdi API %s starting", API_VERSION)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Database refused the connection")
        raise SystemExit(1) from None

    yield

    await engine.dispose()
    logger.info("Snapdi API stopped")


def create_v1_router() -> APIRouter:
    router = APIRouter()
    for sub_router, prefix, tag in _V1_ROUTES:
        router.include_router(sub_router, prefix=prefix, tags=[tag])
    return router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build an application bound to ``settings``.

    Parameters
    ----------
    settings
        Defaults to the process-wide settings. Tests pass their own so each
        app gets its own database and secrets.
    """
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    docs_enabled = settings.api_debug
    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Accounts, authentication, blogs and keywords for Snapdi.",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    engine = create_engine_from_url(settings.database_url, echo=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
