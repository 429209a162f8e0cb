"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.errors import SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Patients table: one row per registered patient
CREATE TABLE IF NOT EXISTS patients (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    age             INT NOT NULL,
    gender          VARCHAR(10),
    phone           VARCHAR(20)
);

-- Doctors table: one row per doctor on staff
CREATE TABLE IF NOT EXISTS doctors (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    specialty       VARCHAR(100),
    phone           VARCHAR(20)
);
"""


def ensure_schema(conn) -> None:
    """
    Execute the schema SQL to create both tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: An open psycopg2 connection.

    Raises:
        SchemaError: If the store is unreachable or rejects the DDL.
    """
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        if not conn.autocommit:
            conn.commit()
        logger.info("Database schema initialized successfully.")
    except psycopg2.Error as e:
        if not conn.closed and not conn.autocommit:
            conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise SchemaError(f"Failed to initialize schema: {str(e).strip()}") from e


create_tables = ensure_schema


if __name__ == "__main__":
    from db.connection import open_database, close_connection

    connection = open_database()
    try:
        ensure_schema(connection)
    finally:
        close_connection(connection)
    print("Database schema created successfully.")
