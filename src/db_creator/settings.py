"""
db_creator.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Fail fast when the administrative connection URL is missing or unparsable.
- Hide credentials from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from db_creator.db.connections import parse_method
from db_creator.errors import ConfigurationError, UnsupportedStrategy


DEV_JWT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """
    Env-driven configuration. Only `admin_database_url` has no default: the tool
    cannot do anything useful without a server to talk to.
    """

    model_config = SettingsConfigDict(
        env_prefix="DBC_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # dev/test create the history table on startup; prod expects Alembic to have run.
    env: Literal["dev", "test", "prod"] = "prod"
    service_name: str = "db-creator"
    log_level: str = "INFO"
    # Daily-rotated file sink in addition to stdout.
    log_file: str | None = None

    # Administrative target: CREATE DATABASE runs here, scripts run against a
    # copy of this URL with only the database segment replaced.
    admin_database_url: str = Field(repr=False)
    connection_method: str = "raw"
    connect_timeout: int | None = None

    # History (db_info table). Defaults to the administrative database.
    history_enabled: bool = True
    history_database_url: str | None = Field(default=None, repr=False)

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    # Scripts named over HTTP must live under this directory; None disables them.
    api_script_dir: str | None = None

    # Bearer-token auth for the HTTP front end.
    jwt_alg: str = "HS256"
    jwt_issuer: str = "db-creator"
    jwt_audience: str = "db-creator-api"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)

    @field_validator("admin_database_url")
    @classmethod
    def _admin_url_is_usable(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("admin_database_url must not be blank")
        try:
            make_url(value)
        except ArgumentError as e:
            raise ValueError(f"admin_database_url is not a valid database URL: {e}") from e
        return value

    @field_validator("connection_method")
    @classmethod
    def _known_connection_method(cls, value: str) -> str:
        try:
            return str(parse_method(value))
        except UnsupportedStrategy as e:
            raise ValueError(str(e)) from e


def load_settings(**overrides: object) -> Settings:
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration is invalid (the administrative connection is read from "
            f"DBC_ADMIN_DATABASE_URL). Details: {e}"
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return load_settings()


# --- Module Notes -----------------------------------------------------------
# Front ends call `get_settings()` once at startup so configuration errors surface
# before any prompt is shown or any request is served.
