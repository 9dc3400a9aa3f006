"""
config.py
---------
Central configuration module. Loads environment variables
(optionally from a .env file) into an immutable Settings value.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv
from psycopg2.extensions import make_dsn

from utils.errors import ConfigError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the API process.

    Attributes:
        db_host: PostgreSQL host name.
        db_port: PostgreSQL port.
        db_user: Database role.
        db_password: Password for ``db_user``.
        db_name: Database name.
        http_host: Interface the HTTP server binds to.
        http_port: Port the HTTP server listens on.
        db_pool_min: Minimum pooled connections.
        db_pool_max: Maximum pooled connections.
    """
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "password"
    db_name: str = "postgres"
    http_host: str = "0.0.0.0"
    http_port: int = 8080
    db_pool_min: int = 1
    db_pool_max: int = 5

    @property
    def database_dsn(self) -> str:
        return make_dsn(
            host=self.db_host,
            port=self.db_port,
            user=self.db_user,
            password=self.db_password,
            dbname=self.db_name,
            sslmode="disable",
        )


def _getenv_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    A missing .env file is not fatal: the process environment is used as is.

    Raises:
        ConfigError: If a numeric setting cannot be parsed.
    """
    dotenv_path = find_dotenv()
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        logger.warning("No .env file found, using environment variables")

    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=_getenv_int("DB_PORT", "5432"),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "password"),
        db_name=os.getenv("DB_NAME", "postgres"),
        http_host=os.getenv("HTTP_HOST", "0.0.0.0"),
        http_port=_getenv_int("HTTP_PORT", "8080"),
        db_pool_min=_getenv_int("DB_POOL_MIN", "1"),
        db_pool_max=_getenv_int("DB_POOL_MAX", "5"),
    )
