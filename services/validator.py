"""
services/validator.py
---------------------
Checks raw form input for patients and doctors and turns it into
domain objects.

Pure functions: no I/O, no logging, same input always gives the same
result. Both front-ends go through here, so the console and the desktop
form apply exactly the same rules.
"""

import re
from typing import Optional

from db.errors import ClinicError
from models.doctor import Doctor
from models.patient import Patient

# ASCII only: str.isdigit() and \d also accept other Unicode digits
_AGE_RE = re.compile(r"[+-]?[0-9]+")
_PHONE_RE = re.compile(r"[0-9]{10}")

# Largest value the INT age column holds
_MAX_AGE_INT = 2**31 - 1

GENDERS = ("M", "F")


class ValidationError(ClinicError, ValueError):
    """
    Raw input failed a field rule.

    Attributes:
        field: Name of the offending field.
        message: Text to show the user.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class EmptyFieldError(ValidationError):
    """A required field was blank."""


class InvalidAgeError(ValidationError):
    """Age is not a non-negative base-10 integer."""


class InvalidGenderError(ValidationError):
    """Gender is neither 'M' nor 'F'."""


class InvalidPhoneError(ValidationError):
    """Phone is not exactly ten digits."""


def _clean(raw: Optional[str]) -> str:
    return (raw or "").strip()


def _check_filled(entity: str, **fields: str) -> None:
    for name, value in fields.items():
        if not value:
            raise EmptyFieldError(name, f"Please fill all {entity} fields.")


def _check_phone(phone: str) -> None:
    if not _PHONE_RE.fullmatch(phone):
        raise InvalidPhoneError("phone", "Phone number must be exactly 10 digits.")


def parse_age(age: str) -> int:
    """
    Parse a trimmed age string.

    Only an optional sign followed by ASCII digits is accepted; Python's
    int() would also take underscores and non-ASCII digits.

    Raises:
        InvalidAgeError: If the text is not an integer, is negative, or
            does not fit a 32-bit signed integer.
    """
    if not _AGE_RE.fullmatch(age):
        raise InvalidAgeError("age", "Age must be a non-negative integer.")
    value = int(age, 10)
    if value < 0 or value > _MAX_AGE_INT:
        raise InvalidAgeError("age", "Age must be a non-negative integer.")
    return value


def validate_patient(
    raw_name: Optional[str],
    raw_age: Optional[str],
    raw_gender: Optional[str],
    raw_phone: Optional[str],
) -> Patient:
    """
    Validate raw patient input.

    Rules run in order and the first failure wins:
        1. every field filled (after trimming)
        2. age is a base-10 integer
        3. age >= 0
        4. gender is M or F (case-insensitive)
        5. phone is exactly ten digits

    Returns:
        A new Patient (no id) with trimmed name/phone and upper-cased gender.

    Raises:
        ValidationError: One of its subclasses, naming the failed rule.
    """
    name = _clean(raw_name)
    age = _clean(raw_age)
    gender = _clean(raw_gender).upper()
    phone = _clean(raw_phone)

    _check_filled("patient", name=name, age=age, gender=gender, phone=phone)
    parsed_age = parse_age(age)
    if gender not in GENDERS:
        raise InvalidGenderError("gender", "Gender must be 'M' or 'F' only.")
    _check_phone(phone)

    return Patient(name=name, age=parsed_age, gender=gender, phone=phone)


def validate_doctor(
    raw_name: Optional[str],
    raw_specialty: Optional[str],
    raw_phone: Optional[str],
) -> Doctor:
    """
    Validate raw doctor input.

    All three fields are required and the phone must be ten digits.
    The old console program accepted a blank specialty and any phone;
    that looser behavior is not kept.

    Returns:
        A new Doctor (no id) with every field trimmed.

    Raises:
        EmptyFieldError, InvalidPhoneError
    """
    name = _clean(raw_name)
    specialty = _clean(raw_specialty)
    phone = _clean(raw_phone)

    _check_filled("doctor", name=name, specialty=specialty, phone=phone)
    _check_phone(phone)

    return Doctor(name=name, specialty=specialty, phone=phone)
