"""
main.py
-------
Entry points for the clinic records application.

Responsibilities:
    - Open the database session and make sure the schema exists.
    - Run the console menu (`main`) or the desktop window (`desktop_main`).
    - Release the connection on exit.
"""

import sys

from db.connection import close_connection, open_database
from db.errors import ConnectionFailedError, PersistenceError, SchemaError
from db.init_db import ensure_schema
from handlers.console_handler import ConsoleApp
from services.record_service import RecordService
from utils.logger import get_logger

logger = get_logger(__name__)


def log_record_counts(service: RecordService) -> None:
    """Log how many patients and doctors the session starts with."""
    try:
        patients = service.patients.count()
        doctors = service.doctors.count()
    except PersistenceError as e:
        logger.warning(f"Could not count records: {e.message}")
        return
    logger.info(f"Database holds {patients} patients and {doctors} doctors.")


def main() -> int:
    """Run the console program with the credentials from config."""

    # ── 1. Database setup ─────────────────────────────────
    try:
        conn = open_database()
    except (ConnectionFailedError, SchemaError) as e:
        print(f"Connection failed: {e}")
        return 1
    print("Connected to the database.")

    try:
        ensure_schema(conn)
    except SchemaError as e:
        print(f"Could not prepare the database: {e}")
        close_connection(conn)
        return 1
    print("Ensured tables patients and doctors exist.")

    # ── 2. Menu loop ──────────────────────────────────────
    service = RecordService(conn)
    log_record_counts(service)
    try:
        ConsoleApp(service).run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")

    # ── 3. Cleanup on shutdown ────────────────────────────
    close_connection(conn)
    print("Connection closed. Goodbye!")
    return 0


def desktop_main() -> int:
    """Run the desktop program; credentials come from its login dialog."""
    from handlers.desktop_handler import run_desktop

    return run_desktop(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
