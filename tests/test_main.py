# tests/test_main.py

import logging

import psycopg2
import pytest

import main
from db.errors import ConnectionFailedError, SchemaError
from tests._fakes import FakeConnection


@pytest.fixture
def session(monkeypatch):
    """Patch main's database hook; returns the fake connection it will get."""
    conn = FakeConnection()
    conn.results.extend([(4,), (2,)])
    monkeypatch.setattr(main, "open_database", lambda: conn)
    return conn


def test_console_run_closes_connection(session, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "5")

    assert main.main() == 0

    out = capsys.readouterr().out
    assert "Ensured tables patients and doctors exist." in out
    assert "Connection closed. Goodbye!" in out
    assert session.closed


def test_startup_logs_record_counts(session, monkeypatch, caplog):
    monkeypatch.setattr("builtins.input", lambda prompt: "5")
    caplog.set_level(logging.INFO, logger="main")

    assert main.main() == 0

    assert "Database holds 4 patients and 2 doctors." in caplog.text
    count_queries = [q for q, _ in session.executed if "COUNT(*)" in q]
    assert count_queries == ["SELECT COUNT(*) FROM patients;", "SELECT COUNT(*) FROM doctors;"]


def test_count_failure_does_not_stop_startup(monkeypatch, caplog):
    conn = FakeConnection()
    monkeypatch.setattr(main, "open_database", lambda: conn)
    monkeypatch.setattr(main, "ensure_schema", lambda c: None)
    conn.fail_with = psycopg2.Error("permission denied for table patients")
    monkeypatch.setattr("builtins.input", lambda prompt: "5")

    assert main.main() == 0
    assert "Could not count records" in caplog.text


def test_connection_failure_exits_with_error(monkeypatch, capsys):
    def refuse():
        raise ConnectionFailedError("could not connect to server")

    monkeypatch.setattr(main, "open_database", refuse)

    assert main.main() == 1
    assert "could not connect to server" in capsys.readouterr().out


def test_schema_failure_is_fatal(session, monkeypatch):
    def broken(conn):
        raise SchemaError("permission denied for schema public")

    monkeypatch.setattr(main, "ensure_schema", broken)

    assert main.main() == 1
    assert session.closed


def test_console_entry_ignores_desktop_flag(session, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["clinic-records", "--desktop"])
    monkeypatch.setattr("builtins.input", lambda prompt: "5")

    assert main.main() == 0
    assert "Connection closed. Goodbye!" in capsys.readouterr().out
