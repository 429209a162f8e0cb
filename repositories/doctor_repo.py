"""
repositories/doctor_repo.py
----------------------------
Data access layer for doctor records.
"""

import psycopg2

from db.errors import PersistenceError
from models.doctor import Doctor
from utils.logger import get_logger

logger = get_logger(__name__)


class DoctorRepository:
    """Repository for insert/list operations on the doctors table."""

    def __init__(self, conn):
        self.conn = conn

    def add(self, doctor: Doctor) -> int:
        """
        Insert a new doctor record.

        Returns:
            The store-generated id, also set on `doctor.id`.

        Raises:
            PersistenceError: If the store rejects the insert.
        """
        sql = """
            INSERT INTO doctors (name, specialty, phone)
            VALUES (%s, %s, %s)
            RETURNING id;
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, (doctor.name, doctor.specialty, doctor.phone))
                doctor.id = cur.fetchone()[0]
        except psycopg2.Error as e:
            logger.error(f"Failed to add doctor: {e}")
            raise PersistenceError(str(e).strip()) from e
        logger.info(f"Added doctor #{doctor.id}")
        return doctor.id

    insert = add

    def list_all(self) -> list[Doctor]:
        """
        Fetch every doctor, ordered by id ascending.

        Raises:
            PersistenceError: If the select fails.
        """
        sql = "SELECT id, name, specialty, phone FROM doctors ORDER BY id ASC;"
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_doctor(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list doctors: {e}")
            raise PersistenceError(str(e).strip()) from e

    def count(self) -> int:
        """Return the number of stored doctors."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM doctors;")
                return cur.fetchone()[0]
        except psycopg2.Error as e:
            logger.error(f"Failed to count doctors: {e}")
            raise PersistenceError(str(e).strip()) from e

    @staticmethod
    def _row_to_doctor(row: tuple) -> Doctor:
        """Convert a database row tuple to a Doctor domain object."""
        return Doctor(
            id=row[0],
            name=row[1],
            specialty=row[2],
            phone=row[3],
        )
