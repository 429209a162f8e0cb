"""
db/errors.py
------------
Exception types raised by the database layer.

Driver exceptions (psycopg2.Error) never escape the db/ and repositories/
packages directly; they are logged and re-raised wrapped in one of these,
with the original chained as ``__cause__``.
"""


class ClinicError(Exception):
    """Base class for every error the application reports to a user."""


class ConnectionFailedError(ClinicError):
    """
    The store could not be reached or rejected the credentials.

    Attributes:
        missing_database: True when the server is up but the requested
            database does not exist yet.
    """

    def __init__(self, message: str, missing_database: bool = False):
        super().__init__(message)
        self.missing_database = missing_database


class SchemaError(ClinicError):
    """Creating the database or its tables failed. Fatal at startup."""


class PersistenceError(ClinicError):
    """
    The store rejected an insert or select.

    Attributes:
        message: The underlying driver message, suitable for display.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
