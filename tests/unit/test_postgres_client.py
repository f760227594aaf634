from unittest.mock import MagicMock

import psycopg2
import pytest

from src.infrastructure.database import postgres_client
from src.infrastructure.database.postgres_client import PostgresClient


@pytest.fixture()
def fake_pool(monkeypatch):
    conn = MagicMock(name="connection")
    cursor = conn.cursor.return_value
    pool = MagicMock(name="pool")
    pool.getconn.return_value = conn
    factory = MagicMock(return_value=pool)
    monkeypatch.setenv("DB_DISABLED", "0")
    monkeypatch.setenv("DB_NAME", "cycling_test")
    monkeypatch.setattr(postgres_client.pool, "ThreadedConnectionPool", factory)
    return factory, pool, conn, cursor


def test_pool_is_configured_from_env(fake_pool):
    factory, *_ = fake_pool
    client = PostgresClient()
    factory.assert_not_called()

    client.execute_many("SELECT 1")

    kwargs = factory.call_args.kwargs
    assert kwargs["database"] == "cycling_test"
    assert kwargs["host"] == "localhost"
    assert kwargs["maxconn"] == 20


def test_execute_many_returns_dict_rows_and_releases_connection(fake_pool):
    _, pool, conn, cursor = fake_pool
    cursor.fetchall.return_value = [{"name": "Ana"}, {"name": "Bo"}]

    rows = PostgresClient().execute_many("SELECT * FROM profiles ORDER BY name ASC")

    assert rows == [{"name": "Ana"}, {"name": "Bo"}]
    conn.commit.assert_called_once()
    cursor.close.assert_called_once()
    pool.putconn.assert_called_once_with(conn)


def test_connection_released_when_query_fails(fake_pool):
    _, pool, conn, cursor = fake_pool
    cursor.execute.side_effect = RuntimeError("server closed the connection unexpectedly")

    with pytest.raises(RuntimeError):
        PostgresClient().execute_many("SELECT * FROM profiles ORDER BY name ASC")

    conn.rollback.assert_called_once()
    conn.commit.assert_not_called()
    cursor.close.assert_called_once()
    pool.putconn.assert_called_once_with(conn)


def test_disabled_client_refuses_queries(monkeypatch):
    monkeypatch.setenv("DB_DISABLED", "1")
    client = PostgresClient()
    with pytest.raises(RuntimeError, match="not enabled"):
        client.execute_many("SELECT 1")


def test_test_connection_reports_failure(fake_pool):
    _, _, _, cursor = fake_pool
    cursor.execute.side_effect = RuntimeError("timeout")
    assert PostgresClient().test_connection() is False


def test_get_postgres_client_disabled(monkeypatch):
    monkeypatch.setenv("DB_DISABLED", "1")
    assert postgres_client.get_postgres_client() is None


def test_close_client_resets_singleton(fake_pool, monkeypatch):
    _, pool, _, _ = fake_pool
    monkeypatch.setattr(postgres_client, "_POSTGRES_CLIENT", None)

    first = postgres_client.get_postgres_client()
    assert postgres_client.get_postgres_client() is first
    first.execute_many("SELECT 1")

    postgres_client.close_postgres_client()
    pool.closeall.assert_called_once()
    assert postgres_client._POSTGRES_CLIENT is None


def test_unreachable_database_fails_the_query_not_the_constructor(monkeypatch):
    factory = MagicMock(side_effect=psycopg2.OperationalError("could not connect to server"))
    monkeypatch.setenv("DB_DISABLED", "0")
    monkeypatch.setattr(postgres_client.pool, "ThreadedConnectionPool", factory)

    client = PostgresClient()

    with pytest.raises(RuntimeError, match="Failed to initialize PostgreSQL connection pool"):
        client.execute_many("SELECT * FROM profiles ORDER BY name ASC")
    assert client.test_connection() is False
    # each attempt retries building the pool
    assert factory.call_count == 2


def test_pool_recovers_once_database_is_back(fake_pool):
    factory, pool, _, cursor = fake_pool
    factory.side_effect = [psycopg2.OperationalError("the database system is starting up"), pool]
    cursor.fetchone.return_value = {"now": "2025-11-12T10:00:00+00:00"}

    client = PostgresClient()

    assert client.test_connection() is False
    assert client.test_connection() is True
    assert client.test_connection() is True
    assert factory.call_count == 2


def test_failed_rollback_keeps_original_error(fake_pool, caplog):
    _, pool, conn, cursor = fake_pool
    cursor.execute.side_effect = psycopg2.ProgrammingError('relation "profiles" does not exist')
    conn.rollback.side_effect = psycopg2.InterfaceError("connection already closed")

    with caplog.at_level("ERROR"):
        with pytest.raises(psycopg2.ProgrammingError, match="does not exist"):
            PostgresClient().execute_many("SELECT * FROM profiles ORDER BY name ASC")

    assert "Rollback failed" in caplog.text
    assert "connection already closed" in caplog.text
    pool.putconn.assert_called_once_with(conn)
