# tests/test_init_db.py

import psycopg2
import pytest

from db.errors import SchemaError
from db.init_db import SCHEMA_SQL, create_tables, ensure_schema
from tests._fakes import FakeConnection


def test_schema_creates_both_tables_if_missing():
    assert "CREATE TABLE IF NOT EXISTS patients" in SCHEMA_SQL
    assert "CREATE TABLE IF NOT EXISTS doctors" in SCHEMA_SQL
    assert SCHEMA_SQL.count("SERIAL PRIMARY KEY") == 2


def test_ensure_schema_executes_ddl(fake_conn):
    ensure_schema(fake_conn)
    assert fake_conn.executed == [(SCHEMA_SQL, None)]
    assert fake_conn.commits == 0


def test_ensure_schema_twice_is_harmless(fake_conn):
    ensure_schema(fake_conn)
    ensure_schema(fake_conn)
    assert len(fake_conn.executed) == 2


def test_ensure_schema_commits_outside_autocommit():
    conn = FakeConnection(autocommit=False)
    ensure_schema(conn)
    assert conn.commits == 1


def test_ensure_schema_failure_raises_schema_error(fake_conn):
    fake_conn.fail_with = psycopg2.ProgrammingError("permission denied for schema public")
    with pytest.raises(SchemaError, match="permission denied") as exc:
        ensure_schema(fake_conn)
    assert isinstance(exc.value.__cause__, psycopg2.Error)


def test_failed_schema_rolls_back_outside_autocommit():
    conn = FakeConnection(autocommit=False)
    conn.fail_with = psycopg2.Error("boom")
    with pytest.raises(SchemaError):
        ensure_schema(conn)
    assert conn.rollbacks == 1


def test_create_tables_alias():
    assert create_tables is ensure_schema
