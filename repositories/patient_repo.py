"""
repositories/patient_repo.py
-----------------------------
Data access layer for patient records.
All SQL queries related to the `patients` table live here.
"""

import psycopg2

from db.errors import PersistenceError
from models.patient import Patient
from utils.logger import get_logger

logger = get_logger(__name__)


class PatientRepository:
    """Repository for insert/list operations on the patients table."""

    def __init__(self, conn):
        """
        Args:
            conn: The session's psycopg2 connection (autocommit).
        """
        self.conn = conn

    # ── CREATE ────────────────────────────────────────────

    def add(self, patient: Patient) -> int:
        """
        Insert a new patient record.

        Args:
            patient: A validated Patient domain object.

        Returns:
            The store-generated id, also set on `patient.id`.

        Raises:
            PersistenceError: If the store rejects the insert.
        """
        sql = """
            INSERT INTO patients (name, age, gender, phone)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, (patient.name, patient.age, patient.gender, patient.phone))
                patient.id = cur.fetchone()[0]
        except psycopg2.Error as e:
            logger.error(f"Failed to add patient: {e}")
            raise PersistenceError(str(e).strip()) from e
        logger.info(f"Added patient #{patient.id}")
        return patient.id

    insert = add

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Patient]:
        """
        Fetch every patient.

        Returns:
            List of Patient objects ordered by id ascending (empty if none).

        Raises:
            PersistenceError: If the select fails.
        """
        sql = "SELECT id, name, age, gender, phone FROM patients ORDER BY id ASC;"
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_patient(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list patients: {e}")
            raise PersistenceError(str(e).strip()) from e

    def count(self) -> int:
        """Return the number of stored patients."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT COUNT(*) FROM patients;")
                return cur.fetchone()[0]
        except psycopg2.Error as e:
            logger.error(f"Failed to count patients: {e}")
            raise PersistenceError(str(e).strip()) from e

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_patient(row: tuple) -> Patient:
        """Convert a database row tuple to a Patient domain object."""
        return Patient(
            id=row[0],
            name=row[1],
            age=row[2],
            gender=row[3],
            phone=row[4],
        )
