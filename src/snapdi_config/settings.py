"""Snapdi settings, read from the environment and an optional .env file.

Lookup order for the .env file:

* ``SNAPDI_ENV_FILE`` (absolute, or relative to the project root)
* ``config/.env.dev`` for local development
* ``config/.env`` for deployments

Process environment variables always win over the file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_JWT_SECRET_LENGTH = 32

_MARKERS = ("config", ".git")


def _project_root() -> Path:
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if any((candidate / marker).is_dir() for marker in _MARKERS):
            return candidate
    return here.parents[1]


def get_config_dir() -> Path:
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get("SNAPDI_ENV_FILE")
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        path = get_config_dir() / name
        if path.exists():
            return path
    return None


class Settings(BaseSettings):
    """All runtime configuration of the API process.

    Only ``JWT_SECRET_KEY`` is mandatory. A database is configured either
    through ``DATABASE_URL_OVERRIDE`` (any SQLAlchemy async URL) or the
    ``POSTGRES_*`` variables, in which case ``POSTGRES_PASSWORD`` is required.
    """

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Snapdi"
    debug: bool = False
    log_level: str = "INFO"

    # Tokens
    jwt_secret_key: SecretStr
    jwt_issuer: str = "snapdi"
    jwt_audience: str = "snapdi-clients"
    jwt_access_token_expire_hours: int = 1
    jwt_refresh_token_expire_days: int = 7
    email_verification_token_expire_hours: int = 24
    password_reset_token_expire_hours: int = 1
    bcrypt_rounds: int = 12

    # Database
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr | None = None
    postgres_db: str = "snapdi"

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""

    # Outgoing mail
    smtp_enabled: bool = False
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "Snapdi"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True
    smtp_timeout_seconds: float = 10.0

    # Verification links hit the API; reset links open the web client
    app_base_url: str = "http://localhost:8000"
    frontend_base_url: str = "http://localhost:5173"

    @field_validator("jwt_secret_key")
    @classmethod
    def _secret_long_enough(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < MIN_JWT_SECRET_LENGTH:
            msg = f"JWT_SECRET_KEY needs at least {MIN_JWT_SECRET_LENGTH} characters"
            raise ValueError(msg)
        return v

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_origins(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(v)
        return str(v) if v else ""

    @model_validator(mode="after")
    def _database_configured(self) -> Settings:
        if self.database_url_override is None and self.postgres_password is None:
            msg = "POSTGRES_PASSWORD is required unless DATABASE_URL_OVERRIDE is set"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        secret = self.postgres_password
        password = secret.get_secret_value() if secret else ""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        origins = (part.strip() for part in self.api_cors_origins.split(","))
        return [origin for origin in origins if origin]


@lru_cache()
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
