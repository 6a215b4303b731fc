"""
db/connection.py
----------------
Manages the process-wide database connection pool.

One ``Database`` object fronts whichever engine was chosen at startup:

    MySQLDatabase     aiomysql pool; every call acquires a connection,
                      runs one statement and releases it (scoped acquisition).
    PostgresDatabase  asyncpg pool; same scoped acquisition, with the
                      acquire timeout applied by the pool itself.

Callers only ever see ``fetch``/``fetch_one``/``fetch_value``/``execute``/``insert``
with ``%s`` templates; placeholder rewriting and error mapping happen here.
"""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

import aiomysql
import asyncpg
import pymysql
from pymysql.constants import CLIENT

from db.dialect import DatabaseSettings, Dialect
from db.placeholders import squeeze, translate
from utils.errors import AppError, Conflict, PoolExhausted, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

_MYSQL_DUPLICATE_ENTRY = 1062


class Database(ABC):
    """Dialect-agnostic query surface over a driver connection pool."""

    def __init__(self, settings: DatabaseSettings, pool: Any) -> None:
        self.settings = settings
        self.dialect: Dialect = settings.dialect
        self._pool = pool
        self._leased: set = set()

    # ── Connection lifecycle ──────────────────────────────

    async def acquire(self) -> Any:
        """
        Take a connection from the pool.

        Raises:
            PoolExhausted: If no connection frees up within the acquire timeout.
        """
        try:
            conn = await self._acquire(self.settings.acquire_timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"No free connection after {self.settings.acquire_timeout}s "
                f"(max {self.settings.max_connections})"
            )
            raise PoolExhausted()
        self._leased.add(conn)
        return conn

    async def release(self, conn: Any) -> None:
        """Return a connection to the pool. Releasing twice is a no-op."""
        if conn is None or conn not in self._leased:
            return
        self._leased.discard(conn)
        await self._release(conn)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Any]:
        """Hold one connection for the duration of the ``async with`` block."""
        conn = await self.acquire()
        try:
            yield conn
        finally:
            await self.release(conn)

    # ── Queries ───────────────────────────────────────────

    async def fetch(self, template: str, params: Sequence[Any] = ()) -> list[dict]:
        """Run a SELECT and return every row as a dict."""
        sql = self._prepare(template)
        try:
            return await self._fetch(sql, list(params))
        except AppError:
            raise
        except Exception as e:
            raise self._wrap_error(e, sql) from e

    async def fetch_one(self, template: str, params: Sequence[Any] = ()) -> Optional[dict]:
        """Run a SELECT and return the first row, or None."""
        rows = await self.fetch(template, params)
        return rows[0] if rows else None

    async def fetch_value(self, template: str, params: Sequence[Any] = ()) -> Any:
        """Run a SELECT and return the first column of the first row, or None."""
        row = await self.fetch_one(template, params)
        if not row:
            return None
        return next(iter(row.values()))

    async def execute(self, template: str, params: Sequence[Any] = ()) -> int:
        """Run a statement and return the number of affected rows."""
        sql = self._prepare(template)
        try:
            return await self._execute(sql, list(params))
        except AppError:
            raise
        except Exception as e:
            raise self._wrap_error(e, sql) from e

    async def insert(self, template: str, params: Sequence[Any] = ()) -> int:
        """Run an INSERT and return the generated primary key."""
        sql = self._prepare(template)
        try:
            return await self._insert(sql, list(params))
        except AppError:
            raise
        except Exception as e:
            raise self._wrap_error(e, sql) from e

    async def ping(self) -> None:
        """Verify connectivity with a trivial query."""
        await self.fetch_value("SELECT 1")

    async def close(self) -> None:
        self._leased.clear()
        await self._close()

    # ── Helpers ───────────────────────────────────────────

    def _prepare(self, template: str) -> str:
        sql = translate(squeeze(template), self.dialect)
        logger.debug(f"[{self.dialect.name}] {sql}")
        return sql

    def _wrap_error(self, error: Exception, sql: str) -> AppError:
        if self._is_unique_violation(error):
            logger.warning(f"Unique constraint violated: {error}")
            return Conflict("Resource already exists")
        logger.error(f"Query failed on {self.dialect.name}: {error} | {sql}")
        return StorageError(str(error))

    # ── Driver hooks ──────────────────────────────────────

    @abstractmethod
    async def _acquire(self, timeout: float) -> Any: ...

    @abstractmethod
    async def _release(self, conn: Any) -> None: ...

    @abstractmethod
    async def _fetch(self, sql: str, params: list) -> list[dict]: ...

    @abstractmethod
    async def _execute(self, sql: str, params: list) -> int: ...

    @abstractmethod
    async def _insert(self, sql: str, params: list) -> int: ...

    @abstractmethod
    async def _close(self) -> None: ...

    @staticmethod
    def _is_unique_violation(error: Exception) -> bool:
        return False


class MySQLDatabase(Database):
    """aiomysql-backed pool; every statement runs on a scoped connection."""

    @classmethod
    async def connect(cls, settings: DatabaseSettings) -> "MySQLDatabase":
        pool = await aiomysql.create_pool(
            host=settings.host,
            port=settings.port,
            user=settings.user,
            password=settings.password,
            db=settings.database,
            minsize=1,
            maxsize=settings.max_connections,
            pool_recycle=int(settings.idle_timeout),
            connect_timeout=settings.connect_timeout,
            autocommit=True,
            charset="utf8mb4",
            # rowcount reports matched rows, not only changed ones
            client_flag=CLIENT.FOUND_ROWS,
        )
        return cls(settings, pool)

    async def _acquire(self, timeout: float) -> Any:
        async def checkout():
            return await self._pool.acquire()

        return await asyncio.wait_for(checkout(), timeout=timeout)

    async def _release(self, conn: Any) -> None:
        self._pool.release(conn)

    async def _fetch(self, sql: str, params: list) -> list[dict]:
        async with self.connection() as conn:
            async with conn.cursor(aiomysql.DictCursor) as cur:
                await cur.execute(sql, tuple(params) if params else None)
                return list(await cur.fetchall())

    async def _execute(self, sql: str, params: list) -> int:
        async with self.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, tuple(params) if params else None)
                return cur.rowcount

    async def _insert(self, sql: str, params: list) -> int:
        async with self.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(sql, tuple(params) if params else None)
                return int(cur.lastrowid)

    async def _close(self) -> None:
        self._pool.close()
        await self._pool.wait_closed()

    @staticmethod
    def _is_unique_violation(error: Exception) -> bool:
        return (
            isinstance(error, pymysql.err.IntegrityError)
            and bool(error.args)
            and error.args[0] == _MYSQL_DUPLICATE_ENTRY
        )


class PostgresDatabase(Database):
    """asyncpg-backed pool; every statement runs on a scoped connection."""

    @classmethod
    async def connect(cls, settings: DatabaseSettings) -> "PostgresDatabase":
        pool = await asyncpg.create_pool(
            dsn=settings.dsn,
            min_size=1,
            max_size=settings.max_connections,
            max_inactive_connection_lifetime=settings.idle_timeout,
            timeout=settings.connect_timeout,
            ssl="require" if settings.ssl else None,
        )
        return cls(settings, pool)

    async def _acquire(self, timeout: float) -> Any:
        return await self._pool.acquire(timeout=timeout)

    async def _release(self, conn: Any) -> None:
        await self._pool.release(conn)

    async def _fetch(self, sql: str, params: list) -> list[dict]:
        async with self.connection() as conn:
            rows = await conn.fetch(sql, *params)
        return [dict(row) for row in rows]

    async def _execute(self, sql: str, params: list) -> int:
        async with self.connection() as conn:
            status = await conn.execute(sql, *params)
        return _affected_rows(status)

    async def _insert(self, sql: str, params: list) -> int:
        sql = sql.rstrip().rstrip(";") + " RETURNING id"
        async with self.connection() as conn:
            return int(await conn.fetchval(sql, *params))

    async def _close(self) -> None:
        await self._pool.close()

    @staticmethod
    def _is_unique_violation(error: Exception) -> bool:
        return isinstance(error, asyncpg.UniqueViolationError)


def _affected_rows(status: Optional[str]) -> int:
    """Parse a command tag such as 'UPDATE 3' or 'INSERT 0 1'."""
    if not status:
        return 0
    last = status.split()[-1]
    return int(last) if last.isdigit() else 0


# ── Process-wide pool ─────────────────────────────────────

_database: Optional[Database] = None


async def init_pool(settings: DatabaseSettings) -> Database:
    """
    Open the connection pool for the configured engine.

    Raises:
        StorageError: If the database is unreachable.
    """
    global _database
    if _database is not None:
        return _database

    factory = PostgresDatabase if settings.dialect.is_postgres else MySQLDatabase
    try:
        database = await factory.connect(settings)
    except Exception as e:
        logger.error(f"❌ Failed to initialize {settings.dialect} pool: {e}")
        raise StorageError(str(e)) from e

    try:
        await database.ping()
    except AppError:
        await database.close()
        raise
    _database = database
    logger.info(f"✅ Connected to {settings.dialect} (pool max {settings.max_connections})")
    return _database


def get_database() -> Database:
    """
    Get the process-wide Database.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _database is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _database


async def close_pool() -> None:
    """Close all connections in the pool."""
    global _database
    if _database is not None:
        await _database.close()
        _database = None
        logger.info("Database connection pool closed.")
