"""
utils/tables.py
---------------
Turns record listings into display rows and fixed-width text tables.
"""

from typing import Iterable

from models.doctor import Doctor
from models.patient import Patient

PATIENT_HEADERS = ("ID", "Name", "Age", "Gender", "Phone")
DOCTOR_HEADERS = ("ID", "Name", "Specialty", "Phone")

_PATIENT_FORMAT = "{:<5} {:<20} {:<5} {:<10} {:<15}"
_DOCTOR_FORMAT = "{:<5} {:<20} {:<20} {:<15}"


def patient_rows(patients: Iterable[Patient]) -> list[tuple]:
    """Row tuples in PATIENT_HEADERS order."""
    return [(p.id, p.name, p.age, p.gender, p.phone) for p in patients]


def doctor_rows(doctors: Iterable[Doctor]) -> list[tuple]:
    """Row tuples in DOCTOR_HEADERS order."""
    return [(d.id, d.name, d.specialty, d.phone) for d in doctors]


def _render(title: str, fmt: str, headers: tuple, rows: list[tuple]) -> str:
    # None (a NULL column) renders as an empty cell
    lines = [f"-- {title} --", fmt.format(*headers).rstrip()]
    for row in rows:
        lines.append(fmt.format(*("" if v is None else str(v) for v in row)).rstrip())
    return "\n".join(lines)


def format_patient_table(patients: Iterable[Patient]) -> str:
    """
    Render patients as a fixed-width table.

    Columns are padded to 5/20/5/10/15 characters; longer values are
    not truncated and push the following columns right.
    """
    return _render("Patients List", _PATIENT_FORMAT, PATIENT_HEADERS, patient_rows(patients))


def format_doctor_table(doctors: Iterable[Doctor]) -> str:
    """Render doctors as a fixed-width table (5/20/20/15 characters)."""
    return _render("Doctors List", _DOCTOR_FORMAT, DOCTOR_HEADERS, doctor_rows(doctors))
