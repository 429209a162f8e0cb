"""
db/connection.py
----------------
Opens and closes the single PostgreSQL session the application runs on.

The connection is a handle owned by the caller (main.py or the desktop
login dialog) and passed explicitly to the schema manager and the
repositories. Nothing in this module keeps it in a global.
"""

from typing import Optional

import psycopg2
from psycopg2 import sql

import config
from db.errors import ConnectionFailedError, SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)


def connect(
    user: Optional[str] = None,
    password: Optional[str] = None,
    dbname: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
):
    """
    Open an autocommit connection to the clinic database.

    Any argument left as None falls back to the matching value in config.
    The password is handed straight to the driver and never stored.

    Returns:
        A psycopg2 connection with ``autocommit`` enabled.

    Raises:
        ConnectionFailedError: If the server is unreachable or refuses the credentials.
    """
    user = config.DB_USER if user is None else user
    dbname = dbname or config.DB_NAME
    host = host or config.DB_HOST
    port = port or config.DB_PORT
    try:
        conn = psycopg2.connect(
            host=host,
            port=port,
            dbname=dbname,
            user=user,
            password=config.DB_PASS if password is None else password,
            connect_timeout=config.DB_CONNECT_TIMEOUT,
        )
    except psycopg2.Error as e:
        logger.error(f"Failed to connect to {dbname} on {host}:{port} as {user}: {e}")
        missing = f"database \"{dbname}\" does not exist" in str(e)
        raise ConnectionFailedError(str(e).strip(), missing_database=missing) from e
    conn.autocommit = True
    logger.info(f"Connected to database {dbname} on {host}:{port} as {user}.")
    return conn


def ensure_database(user: Optional[str] = None, password: Optional[str] = None) -> bool:
    """
    Create the configured database if the server does not have it yet.

    Connects to the maintenance database (``DB_MAINTENANCE_NAME``) for the
    check, since the target may not exist.

    Returns:
        True if the database was created, False if it already existed.

    Raises:
        ConnectionFailedError: If the maintenance database cannot be reached.
        SchemaError: If the lookup or CREATE DATABASE statement fails.
    """
    conn = connect(user, password, dbname=config.DB_MAINTENANCE_NAME)
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1 FROM pg_database WHERE datname = %s;", (config.DB_NAME,))
            if cur.fetchone():
                return False
            cur.execute(
                sql.SQL("CREATE DATABASE {};").format(sql.Identifier(config.DB_NAME))
            )
        logger.info(f"Created database {config.DB_NAME}.")
        return True
    except psycopg2.Error as e:
        logger.error(f"Failed to create database {config.DB_NAME}: {e}")
        raise SchemaError(f"Could not create database {config.DB_NAME}: {str(e).strip()}") from e
    finally:
        conn.close()


def open_database(user: Optional[str] = None, password: Optional[str] = None):
    """
    Connect to the configured database, creating it first if the server
    reports it missing and ``DB_CREATE_DATABASE`` is on.

    The maintenance database is only touched in that case, so an account
    limited to ``DB_NAME`` can still log in.

    Raises:
        ConnectionFailedError: If the server is unreachable, refuses the
            credentials, or the database is missing and may not be created.
        SchemaError: If creating the database fails.
    """
    try:
        return connect(user, password)
    except ConnectionFailedError as e:
        if not (e.missing_database and config.DB_CREATE_DATABASE):
            raise
    ensure_database(user, password)
    return connect(user, password)


def close_connection(conn) -> None:
    """
    Close the session connection if it is still open.

    Args:
        conn: The psycopg2 connection to release, or None.
    """
    if conn is None or conn.closed:
        return
    try:
        conn.close()
        logger.info("Database connection closed.")
    except psycopg2.Error as e:
        logger.warning(f"Error closing connection: {e}")
