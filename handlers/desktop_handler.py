"""
handlers/desktop_handler.py
----------------------------
Qt front-end: a login dialog that supplies the database credentials,
then a window with patient and doctor pages.
Delegates all logic to RecordService.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from PySide6 import QtCore, QtWidgets

import config
from db.connection import close_connection, open_database
from db.errors import ConnectionFailedError, PersistenceError, SchemaError
from db.init_db import ensure_schema
from services.record_service import RecordService
from services.validator import ValidationError
from utils.logger import get_logger
from utils.tables import DOCTOR_HEADERS, PATIENT_HEADERS, doctor_rows, patient_rows

logger = get_logger(__name__)


def show_info(parent, message: str) -> None:
    QtWidgets.QMessageBox.information(parent, "Success", message)


def show_error(parent, message: str) -> None:
    QtWidgets.QMessageBox.critical(parent, "Error", message)


def open_session(user: str, password: str):
    """
    Connect with the credentials typed at login and make sure the
    database and tables exist.

    Raises:
        ConnectionFailedError: Credentials refused or server unreachable.
        SchemaError: Connected, but the database or tables could not be created.
    """
    conn = open_database(user, password)
    try:
        ensure_schema(conn)
    except SchemaError:
        close_connection(conn)
        raise
    return conn


class LoginDialog(QtWidgets.QDialog):
    """Collects the database user and password and opens the session."""

    def __init__(self, connect_func: Callable = open_session, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._connect_func = connect_func
        self.conn = None
        self.fatal_error: Optional[str] = None

        self.setWindowTitle("Hospital Management - Login")
        self.setModal(True)
        self.setFixedSize(400, 220)

        layout = QtWidgets.QFormLayout(self)

        self.user_field = QtWidgets.QLineEdit(config.DB_USER)
        self.pass_field = QtWidgets.QLineEdit()
        self.pass_field.setEchoMode(QtWidgets.QLineEdit.Password)
        layout.addRow("Database User:", self.user_field)
        layout.addRow("Database Password:", self.pass_field)

        self.login_button = QtWidgets.QPushButton("Login")
        layout.addRow(self.login_button)

        self.status_label = QtWidgets.QLabel(" ")
        self.status_label.setAlignment(QtCore.Qt.AlignCenter)
        self.status_label.setStyleSheet("color: red;")
        layout.addRow(self.status_label)

        self.login_button.clicked.connect(self.attempt_login)
        self.pass_field.returnPressed.connect(self.attempt_login)

    def attempt_login(self) -> None:
        user = self.user_field.text().strip()
        if not user:
            self._show_error("Enter a username.")
            return

        try:
            self.conn = self._connect_func(user, self.pass_field.text())
        except ConnectionFailedError:
            self._show_error("Login failed, please try again.")
            return
        except SchemaError as e:
            self.fatal_error = str(e)
            show_error(self, f"Could not prepare the database:\n{e}")
            self.reject()
            return

        self.status_label.setStyleSheet("color: green;")
        self.status_label.setText("Login successful. Preparing application...")
        self.accept()

    def _show_error(self, message: str) -> None:
        self.status_label.setStyleSheet("color: red;")
        self.status_label.setText(message)
        self.pass_field.clear()
        self.pass_field.setFocus()


class RecordTable(QtWidgets.QTableWidget):
    """Read-only table view for one listing."""

    def __init__(self, headers: Sequence[str], parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(0, len(headers), parent)
        self.setHorizontalHeaderLabels(list(headers))
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.horizontalHeader().setStretchLastSection(True)
        self.verticalHeader().setVisible(False)

    def set_rows(self, rows: List[tuple]) -> None:
        self.setRowCount(0)
        for row in rows:
            index = self.rowCount()
            self.insertRow(index)
            for col, value in enumerate(row):
                text = "" if value is None else str(value)
                self.setItem(index, col, QtWidgets.QTableWidgetItem(text))


class RecordPage(QtWidgets.QWidget):
    """
    "Add" and "List" tabs for one entity plus a Back to Menu button.

    Args:
        entity: Display name ("Patient" or "Doctor").
        fields: (label, key) pairs for the add form, in submit order.
        headers: Column titles for the listing.
        submit: Called with the raw field texts; returns the stored record.
        load: Returns the listing as row tuples.
    """

    back_requested = QtCore.Signal()

    def __init__(
        self,
        entity: str,
        fields: Sequence[tuple],
        headers: Sequence[str],
        submit: Callable,
        load: Callable[[], List[tuple]],
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.entity = entity
        self._submit = submit
        self._load = load
        self.inputs: dict[str, QtWidgets.QLineEdit] = {}

        layout = QtWidgets.QVBoxLayout(self)
        self.tabs = QtWidgets.QTabWidget()
        layout.addWidget(self.tabs)

        form_widget = QtWidgets.QWidget()
        form = QtWidgets.QFormLayout(form_widget)
        for label, key in fields:
            line_edit = QtWidgets.QLineEdit()
            self.inputs[key] = line_edit
            form.addRow(label, line_edit)
        self.add_button = QtWidgets.QPushButton(f"Add {entity}")
        form.addRow(self.add_button)
        self.tabs.addTab(form_widget, f"Add {entity}")

        self.table = RecordTable(headers)
        self.tabs.addTab(self.table, f"List {entity}s")

        back_row = QtWidgets.QHBoxLayout()
        back_row.addStretch(1)
        back_button = QtWidgets.QPushButton("Back to Menu")
        back_row.addWidget(back_button)
        layout.addLayout(back_row)

        self.add_button.clicked.connect(self.add_record)
        back_button.clicked.connect(self.back_requested.emit)

    def add_record(self) -> None:
        raw = [line_edit.text() for line_edit in self.inputs.values()]
        try:
            record = self._submit(*raw)
        except ValidationError as e:
            self._show_error(e.message)
            return
        except PersistenceError as e:
            self._show_error(f"Failed to add {self.entity.lower()}:\n{e.message}")
            return
        logger.info(f"{self.entity} #{record.id} added from the desktop form")
        show_info(self, f"{self.entity} added successfully.")
        for line_edit in self.inputs.values():
            line_edit.clear()
        self.refresh()

    def refresh(self) -> None:
        try:
            rows = self._load()
        except PersistenceError as e:
            self._show_error(f"Failed to load {self.entity.lower()}s:\n{e.message}")
            return
        self.table.set_rows(rows)

    def _show_error(self, message: str) -> None:
        show_error(self, message)


class MainWindow(QtWidgets.QMainWindow):
    """Welcome menu plus one RecordPage per entity, switched in a stack."""

    def __init__(self, conn, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.conn = conn
        self.service = RecordService(conn)

        self.setWindowTitle("Hospital Management System")
        self.resize(700, 450)

        self.stack = QtWidgets.QStackedWidget()
        self.setCentralWidget(self.stack)

        self.welcome_page = self._build_welcome_page()
        self.patient_page = RecordPage(
            "Patient",
            [("Name:", "name"), ("Age:", "age"), ("Gender (M/F):", "gender"), ("Phone (10 digits):", "phone")],
            PATIENT_HEADERS,
            self.service.add_patient,
            lambda: patient_rows(self.service.list_patients()),
        )
        self.doctor_page = RecordPage(
            "Doctor",
            [("Name:", "name"), ("Specialty:", "specialty"), ("Phone (10 digits):", "phone")],
            DOCTOR_HEADERS,
            self.service.add_doctor,
            lambda: doctor_rows(self.service.list_doctors()),
        )
        for page in (self.welcome_page, self.patient_page, self.doctor_page):
            self.stack.addWidget(page)
        self.patient_page.back_requested.connect(self.show_welcome)
        self.doctor_page.back_requested.connect(self.show_welcome)

    def _build_welcome_page(self) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout(page)

        title = QtWidgets.QLabel("Welcome to Hospital Management System")
        title.setAlignment(QtCore.Qt.AlignCenter)
        font = title.font()
        font.setPointSize(16)
        font.setBold(True)
        title.setFont(font)
        layout.addWidget(title)

        buttons = QtWidgets.QHBoxLayout()
        patients_btn = QtWidgets.QPushButton("Manage Patients")
        doctors_btn = QtWidgets.QPushButton("Manage Doctors")
        exit_btn = QtWidgets.QPushButton("Exit")
        for button in (patients_btn, doctors_btn, exit_btn):
            buttons.addWidget(button)
        layout.addLayout(buttons)

        patients_btn.clicked.connect(self.show_patients)
        doctors_btn.clicked.connect(self.show_doctors)
        exit_btn.clicked.connect(self.close)
        return page

    def show_welcome(self) -> None:
        self.stack.setCurrentWidget(self.welcome_page)

    def show_patients(self) -> None:
        self.patient_page.refresh()
        self.stack.setCurrentWidget(self.patient_page)

    def show_doctors(self) -> None:
        self.doctor_page.refresh()
        self.stack.setCurrentWidget(self.doctor_page)

    def closeEvent(self, event) -> None:  # noqa: N802
        close_connection(self.conn)
        super().closeEvent(event)


def run_desktop(argv: Optional[List[str]] = None) -> int:
    """
    Start the Qt application.

    Returns:
        Process exit status: 0 on normal close or cancelled login,
        1 if the schema could not be created.
    """
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(argv or [])

    login = LoginDialog()
    if login.exec() != QtWidgets.QDialog.Accepted:
        return 1 if login.fatal_error else 0

    window = MainWindow(login.conn)
    window.show()
    return app.exec()
