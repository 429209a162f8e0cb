# tests/test_connection.py

import psycopg2
import pytest
from psycopg2 import sql

import config
from db import connection
from db.errors import ConnectionFailedError, SchemaError
from tests._fakes import FakeConnection


@pytest.fixture
def captured(monkeypatch):
    """Replace psycopg2.connect; record each call's kwargs and hand back a fake."""
    calls = []

    def fake_connect(**kwargs):
        conn = FakeConnection(autocommit=False)
        calls.append((kwargs, conn))
        return conn

    monkeypatch.setattr(psycopg2, "connect", fake_connect)
    monkeypatch.setattr(config, "DB_HOST", "db.local")
    monkeypatch.setattr(config, "DB_PORT", 5433)
    monkeypatch.setattr(config, "DB_NAME", "hospital_db")
    monkeypatch.setattr(config, "DB_USER", "clinic")
    monkeypatch.setattr(config, "DB_PASS", "from-env")
    monkeypatch.setattr(config, "DB_MAINTENANCE_NAME", "postgres")
    return calls


def test_connect_uses_config_defaults_and_autocommit(captured):
    conn = connection.connect()

    kwargs, fake = captured[0]
    assert conn is fake
    assert conn.autocommit is True
    assert kwargs["host"] == "db.local"
    assert kwargs["port"] == 5433
    assert kwargs["dbname"] == "hospital_db"
    assert kwargs["user"] == "clinic"
    assert kwargs["password"] == "from-env"


def test_login_credentials_override_config(captured):
    connection.connect("admin", "typed-at-login")
    kwargs, _ = captured[0]
    assert kwargs["user"] == "admin"
    assert kwargs["password"] == "typed-at-login"


def test_empty_password_is_passed_through(captured):
    connection.connect("admin", "")
    assert captured[0][0]["password"] == ""


def test_connect_failure_raises_connection_failed(monkeypatch):
    def refuse(**kwargs):
        raise psycopg2.OperationalError('FATAL:  password authentication failed for user "admin"\n')

    monkeypatch.setattr(psycopg2, "connect", refuse)
    with pytest.raises(ConnectionFailedError, match="password authentication failed"):
        connection.connect("admin", "wrong")


def test_ensure_database_skips_existing(captured, monkeypatch):
    def fake_connect(**kwargs):
        conn = FakeConnection(autocommit=False)
        conn.results.append((1,))
        captured.append((kwargs, conn))
        return conn

    monkeypatch.setattr(psycopg2, "connect", fake_connect)

    assert connection.ensure_database() is False

    kwargs, conn = captured[0]
    assert kwargs["dbname"] == "postgres"
    assert conn.executed == [("SELECT 1 FROM pg_database WHERE datname = %s;", ("hospital_db",))]
    assert conn.closed


def test_ensure_database_creates_missing(captured, monkeypatch):
    def fake_connect(**kwargs):
        conn = FakeConnection(autocommit=False)
        conn.results.append(None)
        captured.append((kwargs, conn))
        return conn

    monkeypatch.setattr(psycopg2, "connect", fake_connect)

    assert connection.ensure_database("admin", "pw") is True

    _, conn = captured[0]
    assert len(conn.executed) == 2
    create_stmt, params = conn.executed[1]
    assert isinstance(create_stmt, sql.Composed)
    assert params is None
    assert conn.autocommit is True
    assert conn.closed


def test_ensure_database_failure_raises_schema_error(captured, monkeypatch):
    def fake_connect(**kwargs):
        conn = FakeConnection(autocommit=False)
        conn.fail_with = psycopg2.Error("permission denied to create database")
        captured.append((kwargs, conn))
        return conn

    monkeypatch.setattr(psycopg2, "connect", fake_connect)

    with pytest.raises(SchemaError, match="permission denied"):
        connection.ensure_database()
    assert captured[0][1].closed


def test_close_connection(fake_conn):
    connection.close_connection(fake_conn)
    assert fake_conn.closed


def test_close_connection_tolerates_none_and_closed(fake_conn):
    connection.close_connection(None)
    fake_conn.closed = 1
    connection.close_connection(fake_conn)


def _server(monkeypatch, captured, databases):
    """Fake server that only knows `databases`; records every dbname asked for."""

    def fake_connect(**kwargs):
        dbname = kwargs["dbname"]
        if dbname not in databases:
            raise psycopg2.OperationalError(f'FATAL:  database "{dbname}" does not exist\n')
        conn = FakeConnection(autocommit=False)
        if dbname == "postgres":
            conn.results.append(None)
            databases.append(config.DB_NAME)
        captured.append((kwargs, conn))
        return conn

    monkeypatch.setattr(psycopg2, "connect", fake_connect)


def test_missing_database_is_flagged(captured, monkeypatch):
    _server(monkeypatch, captured, ["postgres"])
    with pytest.raises(ConnectionFailedError) as exc:
        connection.connect("admin", "pw")
    assert exc.value.missing_database is True


def test_open_database_skips_maintenance_db_when_target_exists(captured, monkeypatch):
    _server(monkeypatch, captured, ["hospital_db"])
    monkeypatch.setattr(config, "DB_CREATE_DATABASE", True)

    conn = connection.open_database("clinic_only", "pw")

    assert [kwargs["dbname"] for kwargs, _ in captured] == ["hospital_db"]
    assert conn is captured[0][1]


def test_open_database_creates_missing_database(captured, monkeypatch):
    _server(monkeypatch, captured, ["postgres"])
    monkeypatch.setattr(config, "DB_CREATE_DATABASE", True)

    conn = connection.open_database("admin", "pw")

    assert [kwargs["dbname"] for kwargs, _ in captured] == ["postgres", "hospital_db"]
    assert conn is captured[-1][1]


def test_open_database_respects_create_switch(captured, monkeypatch):
    _server(monkeypatch, captured, ["postgres"])
    monkeypatch.setattr(config, "DB_CREATE_DATABASE", False)

    with pytest.raises(ConnectionFailedError):
        connection.open_database("admin", "pw")
    assert captured == []


def test_open_database_reraises_bad_credentials(captured, monkeypatch):
    def refuse(**kwargs):
        raise psycopg2.OperationalError('FATAL:  password authentication failed for user "admin"\n')

    monkeypatch.setattr(psycopg2, "connect", refuse)
    monkeypatch.setattr(config, "DB_CREATE_DATABASE", True)

    with pytest.raises(ConnectionFailedError) as exc:
        connection.open_database("admin", "wrong")
    assert exc.value.missing_database is False
