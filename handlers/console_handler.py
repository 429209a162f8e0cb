"""
handlers/console_handler.py
----------------------------
Numbered text menu over stdin/stdout.
Delegates all logic to RecordService.
"""

from typing import Callable, Optional

from db.errors import PersistenceError
from services.record_service import RecordService
from services.validator import ValidationError
from utils.logger import get_logger
from utils.tables import format_doctor_table, format_patient_table

logger = get_logger(__name__)

MENU = (
    "\nHospital Management System\n"
    "1. Add Patient\n"
    "2. List Patients\n"
    "3. Add Doctor\n"
    "4. List Doctors\n"
    "5. Exit"
)

EXIT_OPTION = 5


class ConsoleApp:
    """
    Blocking menu loop.

    Args:
        service: RecordService bound to the session connection.
        input_func: Reads one line given a prompt (default: builtin input).
        output_func: Writes one message (default: builtin print).
    """

    def __init__(
        self,
        service: RecordService,
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None,
    ):
        self.service = service
        self._input = input_func or input
        self._output = output_func or print
        self._actions = {
            1: self.add_patient,
            2: self.list_patients,
            3: self.add_doctor,
            4: self.list_doctors,
        }

    def run(self) -> None:
        """Show the menu until the user picks Exit or input runs out."""
        while True:
            self._output(MENU)
            try:
                raw = self._input("Choose an option: ")
            except EOFError:
                return

            try:
                choice = int(raw.strip())
            except ValueError:
                self._output("Invalid input, enter a number.")
                continue

            if choice == EXIT_OPTION:
                return
            action = self._actions.get(choice)
            if action is None:
                self._output("Invalid option, try again.")
                continue
            try:
                action()
            except EOFError:
                return

    # ── Patients ──────────────────────────────────────────

    def add_patient(self) -> None:
        name = self._input("Enter patient name: ")
        age = self._input("Enter patient age: ")
        gender = self._input("Enter patient gender (M/F): ")
        phone = self._input("Enter patient phone (10 digits): ")
        try:
            patient = self.service.add_patient(name, age, gender, phone)
        except ValidationError as e:
            logger.info(f"Rejected patient input: {e.field}")
            self._output(e.message)
            return
        except PersistenceError as e:
            self._output(f"SQL Error while adding patient: {e.message}")
            return
        self._output(f"Patient added successfully (ID {patient.id}).")

    def list_patients(self) -> None:
        try:
            patients = self.service.list_patients()
        except PersistenceError as e:
            self._output(f"SQL Error while listing patients: {e.message}")
            return
        self._output("\n" + format_patient_table(patients))

    # ── Doctors ───────────────────────────────────────────

    def add_doctor(self) -> None:
        name = self._input("Enter doctor name: ")
        specialty = self._input("Enter doctor specialty: ")
        phone = self._input("Enter doctor phone (10 digits): ")
        try:
            doctor = self.service.add_doctor(name, specialty, phone)
        except ValidationError as e:
            logger.info(f"Rejected doctor input: {e.field}")
            self._output(e.message)
            return
        except PersistenceError as e:
            self._output(f"SQL Error while adding doctor: {e.message}")
            return
        self._output(f"Doctor added successfully (ID {doctor.id}).")

    def list_doctors(self) -> None:
        try:
            doctors = self.service.list_doctors()
        except PersistenceError as e:
            self._output(f"SQL Error while listing doctors: {e.message}")
            return
        self._output("\n" + format_doctor_table(doctors))
