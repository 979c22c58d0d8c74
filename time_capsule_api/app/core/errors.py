"""
Exception hierarchy for the capsule service.

Services raise these exceptions; the HTTP layer translates them into
``{"message": ...}`` responses (see ``app.main``).  The message passed
to the constructor is shown to the caller verbatim.
"""


class CapsuleError(Exception):
    """Base class for every error raised by the capsule core."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CapsuleError, ValueError):
    """Caller supplied missing or malformed capsule fields."""

    status_code = 400


class CapsuleNotFoundError(CapsuleError, LookupError):
    """No capsule with the requested identifier exists."""

    status_code = 404


class StoreError(CapsuleError):
    """The backing file could not be read or written."""


class StoreCorruptError(StoreError):
    """The backing file exists but does not hold a capsule list."""
