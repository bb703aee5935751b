"""
services/exceptions.py

Domain errors raised by the service layer.
middlewares/error_handler.py maps each one to an HTTP status and the common error envelope.
"""


class SchoolError(Exception):
    """Base class for expected, client-facing failures."""

    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchoolError):
    """A required parameter is missing or has an invalid value."""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(SchoolError):
    """The referenced school year, class, student or enrollment does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class ConflictError(SchoolError):
    """A business rule rejected a write (e.g. a second enrollment in one school year)."""

    status_code = 400
    code = "CONFLICT"
