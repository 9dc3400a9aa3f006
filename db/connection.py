"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool, since request handlers run on
the web server's worker threads.

PostgresDatabase is the only object the data-access layer talks to.
It exposes two capabilities:
    execute(sql, params) -> number of affected rows
    query(sql, params)   -> list of row tuples
"""

import threading
from typing import Any, Optional, Sequence

import psycopg2
from psycopg2 import pool

from config import Settings
from utils.errors import DatabaseConnectionError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


class PostgresDatabase:
    """Pooled PostgreSQL access with per-statement commits."""

    def __init__(self, settings: Settings):
        """
        Open the pool and verify the database answers.

        Args:
            settings: Connection parameters and pool bounds.

        Raises:
            DatabaseConnectionError: If the database is unreachable.
        """
        self._slots = threading.BoundedSemaphore(settings.db_pool_max)
        try:
            self._pool = pool.ThreadedConnectionPool(
                settings.db_pool_min, settings.db_pool_max, settings.database_dsn
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise DatabaseConnectionError(f"failed to connect to database: {e}") from e

        try:
            self.ping()
        except StorageError as e:
            self.close()
            raise DatabaseConnectionError(f"failed to ping database: {e}") from e
        logger.info(
            f"Database connection pool initialized ({settings.db_host}:{settings.db_port}/{settings.db_name})."
        )

    def ping(self) -> None:
        """Run a trivial statement to check the connection."""
        self.query("SELECT 1;")

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> int:
        """
        Execute a write statement and commit it.

        Returns:
            The number of rows affected.

        Raises:
            StorageError: If the statement fails or no connection is available.
        """
        return self._run(sql, params, fetch=False)

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> list[tuple]:
        """
        Execute a statement and return every row it produced.

        The transaction is committed afterwards so that
        ``INSERT ... RETURNING`` statements persist.

        Raises:
            StorageError: If the statement fails or no connection is available.
        """
        return self._run(sql, params, fetch=True)

    def _run(self, sql: str, params: Optional[Sequence[Any]], fetch: bool):
        # ThreadedConnectionPool raises instead of blocking when exhausted,
        # so callers wait here for a free slot.
        with self._slots:
            conn = None
            try:
                conn = self._pool.getconn()
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    result = cur.fetchall() if fetch else cur.rowcount
                conn.commit()
                return result
            except psycopg2.Error as e:
                if conn is not None:
                    conn.rollback()
                logger.error(f"Statement failed: {e}")
                raise StorageError(str(e)) from e
            finally:
                if conn is not None:
                    self._pool.putconn(conn)

    def close(self) -> None:
        """Close all connections in the pool."""
        if not self._pool.closed:
            self._pool.closeall()
            logger.info("Database connection pool closed.")
