"""
services/record_service.py
---------------------------
Business logic for registering and listing patients and doctors.
Orchestrates between the validator and the repositories.
"""

from typing import Optional

from models.doctor import Doctor
from models.patient import Patient
from repositories.doctor_repo import DoctorRepository
from repositories.patient_repo import PatientRepository
from services.validator import validate_doctor, validate_patient


class RecordService:
    """
    The request/response interface every front-end drives.

    Workflow:
        1. Receive raw field text from the front-end.
        2. Validate and normalize it.
        3. Persist via the repository.
        4. Return the stored record (with its id).

    Errors are raised, never printed: ValidationError for bad input,
    PersistenceError when the store refuses the statement.
    """

    def __init__(self, conn):
        self.patients = PatientRepository(conn)
        self.doctors = DoctorRepository(conn)

    def add_patient(
        self,
        raw_name: Optional[str],
        raw_age: Optional[str],
        raw_gender: Optional[str],
        raw_phone: Optional[str],
    ) -> Patient:
        patient = validate_patient(raw_name, raw_age, raw_gender, raw_phone)
        self.patients.add(patient)
        return patient

    def add_doctor(
        self,
        raw_name: Optional[str],
        raw_specialty: Optional[str],
        raw_phone: Optional[str],
    ) -> Doctor:
        doctor = validate_doctor(raw_name, raw_specialty, raw_phone)
        self.doctors.add(doctor)
        return doctor

    def list_patients(self) -> list[Patient]:
        return self.patients.list_all()

    def list_doctors(self) -> list[Doctor]:
        return self.doctors.list_all()
