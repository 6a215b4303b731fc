"""
db/dialect.py
-------------
Decides, once per process, which SQL engine the service talks to.

The presence of ``DATABASE_URL`` selects PostgreSQL; otherwise the local
MySQL settings are used. The result is an immutable ``DatabaseSettings``
that is handed to the connection pool and never re-read per request.
"""

from dataclasses import dataclass
from typing import Optional

import config
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dialect:
    """
    SQL conventions of one engine.

    Attributes:
        name: Short identifier ('mysql' or 'postgres').
        label: Human-readable name reported by /api/health.
        numbered_placeholders: True when parameters are written ``$1..$N``.
        like_operator: Case-insensitive substring match operator.
    """
    name: str
    label: str
    numbered_placeholders: bool
    like_operator: str

    @property
    def is_postgres(self) -> bool:
        return self.name == "postgres"

    def json_text(self, column: str, key: str) -> str:
        """SQL expression extracting ``key`` of a JSON column as text."""
        if self.is_postgres:
            return f"{column}->>'{key}'"
        return f"JSON_UNQUOTE(JSON_EXTRACT({column}, '$.{key}'))"

    def __str__(self) -> str:
        return self.label


MYSQL = Dialect(name="mysql", label="MySQL (Local)", numbered_placeholders=False, like_operator="LIKE")
POSTGRES = Dialect(name="postgres", label="PostgreSQL", numbered_placeholders=True, like_operator="ILIKE")


@dataclass(frozen=True)
class DatabaseSettings:
    """Everything needed to open the connection pool for the chosen engine."""
    dialect: Dialect
    dsn: Optional[str] = None
    host: str = "localhost"
    port: int = 3306
    user: str = ""
    password: str = ""
    database: str = ""
    ssl: bool = False
    max_connections: int = 10
    idle_timeout: float = 30.0
    connect_timeout: float = 2.0
    acquire_timeout: float = 10.0


def resolve_database_settings(database_url: Optional[str] = None) -> DatabaseSettings:
    """
    Build the process-wide database settings.

    Args:
        database_url: Overrides ``config.DATABASE_URL`` (used by tests).

    Returns:
        Settings for PostgreSQL when a URL is configured, MySQL otherwise.
        Never raises: missing values fall back to the local defaults.
    """
    url = config.DATABASE_URL if database_url is None else database_url
    pool_limits = dict(
        max_connections=config.DB_POOL_MAX,
        idle_timeout=config.DB_IDLE_TIMEOUT_SECONDS,
        connect_timeout=config.DB_CONNECT_TIMEOUT_SECONDS,
        acquire_timeout=config.DB_ACQUIRE_TIMEOUT_SECONDS,
    )

    if url:
        logger.info("🐘 Using PostgreSQL database")
        return DatabaseSettings(
            dialect=POSTGRES,
            dsn=url,
            ssl=config.APP_ENV == "production",
            **pool_limits,
        )

    logger.info("🐬 Using MySQL database (local)")
    return DatabaseSettings(
        dialect=MYSQL,
        host=config.DB_HOST,
        port=config.DB_PORT,
        user=config.DB_USER,
        password=config.DB_PASSWORD,
        database=config.DB_NAME,
        **pool_limits,
    )
