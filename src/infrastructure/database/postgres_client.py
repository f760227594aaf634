"""PostgreSQL database client.

This module provides a thread-safe connection pool and helper functions for
running queries against the cycling network database.
"""
from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from typing import Any, Generator

import psycopg2
from psycopg2 import pool, sql
from psycopg2.extras import RealDictCursor

logger = logging.getLogger(__name__)

SQLQuery = str | sql.Composable


class PostgresClient:
    """PostgreSQL database client with connection pooling."""

    def __init__(self) -> None:
        """Initialize PostgreSQL connection pool."""
        self.enabled = os.getenv("DB_DISABLED", "0") != "1"
        self._pool: Any = None
        self._pool_lock = threading.Lock()

    def _get_pool(self) -> Any:
        """Create the connection pool on first use.

        Building the pool opens a connection, so an unreachable database only
        fails the query that needed it. A failed attempt is retried on the next call.
        """
        with self._pool_lock:
            if self._pool is None:
                try:
                    self._pool = pool.ThreadedConnectionPool(
                        minconn=1,
                        maxconn=int(os.getenv("DB_POOL_MAX", "20")),
                        host=os.getenv("DB_HOST", "localhost"),
                        port=int(os.getenv("DB_PORT", "5432")),
                        database=os.getenv("DB_NAME", "cycling_network"),
                        user=os.getenv("DB_USER", "cycling_user"),
                        password=os.getenv("DB_PASSWORD", "cycling_password"),
                        connect_timeout=int(os.getenv("DB_CONNECT_TIMEOUT", "2")),
                    )
                except psycopg2.Error as exc:
                    raise RuntimeError(f"Failed to initialize PostgreSQL connection pool: {exc}") from exc
            return self._pool

    @contextmanager
    def get_connection(self) -> Generator[Any, None, None]:
        """Get a database connection from the pool.

        Yields:
            Database connection with automatic return to pool on exit.

        Raises:
            RuntimeError: If the database is disabled or the pool cannot be created.
        """
        if not self.enabled:
            raise RuntimeError("PostgreSQL database is not enabled")

        db_pool = self._get_pool()
        conn = None
        try:
            conn = db_pool.getconn()
            yield conn
            conn.commit()
        except BaseException:
            if conn:
                try:
                    conn.rollback()
                except Exception:
                    # keep the original failure as the one that propagates
                    logger.exception("Rollback failed")
            raise
        finally:
            if conn:
                db_pool.putconn(conn)

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Get a database cursor.

        Args:
            dict_cursor: If True, returns results as dictionaries (default: True).

        Yields:
            Database cursor.
        """
        with self.get_connection() as conn:
            cursor_factory = RealDictCursor if dict_cursor else None
            cursor = conn.cursor(cursor_factory=cursor_factory)
            try:
                yield cursor
            finally:
                cursor.close()

    def execute_one(self, query: SQLQuery, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a query and return a single result.

        Returns:
            Single row as dictionary or None if no results.
        """
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            result = cursor.fetchone()
            return dict(result) if result else None

    def execute_many(self, query: SQLQuery, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and return all results, in the order the server sent them."""
        with self.get_cursor() as cursor:
            cursor.execute(query, params)
            results = cursor.fetchall()
            return [dict(row) for row in results]

    def test_connection(self) -> bool:
        """Run a trivial query to check the database is reachable."""
        try:
            return self.execute_one("SELECT NOW() AS now") is not None
        except Exception:
            logger.exception("Database connection test failed")
            return False

    def close(self) -> None:
        """Close all connections in the pool."""
        with self._pool_lock:
            if self._pool:
                self._pool.closeall()
                self._pool = None


# Singleton instance
_POSTGRES_CLIENT: PostgresClient | None = None


def get_postgres_client() -> PostgresClient | None:
    """Get PostgreSQL client singleton.

    Returns:
        PostgresClient instance if enabled, None otherwise.
    """
    global _POSTGRES_CLIENT
    if os.getenv("DB_DISABLED", "0") == "1":
        return None
    if _POSTGRES_CLIENT is None:
        _POSTGRES_CLIENT = PostgresClient()
    return _POSTGRES_CLIENT


def close_postgres_client() -> None:
    global _POSTGRES_CLIENT
    if _POSTGRES_CLIENT is not None:
        _POSTGRES_CLIENT.close()
        _POSTGRES_CLIENT = None
