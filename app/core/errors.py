"""
Error taxonomy for the booking API.

Services raise these; the handlers registered in app.main render them, so
routes stay thin and never build error responses by hand.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import exc as sa_exc

# HTTP status codes per error category
STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500

MSG_SLOT_FULL = "This time slot is fully booked. Please choose another time."
MSG_INTERNAL_ERROR = "Internal server error"
MSG_ROUTE_NOT_FOUND = "Route not found"
MSG_BOOKING_NOT_FOUND = "Booking not found"

# PostgreSQL SQLSTATEs for query_canceled and lock_not_available
_TIMEOUT_PGCODES = {"57014", "55P03"}


class BookingError(Exception):
    """Base class; carries the status code and the message shown to clients."""

    status_code = STATUS_INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    status_code = STATUS_BAD_REQUEST

    def __init__(self, message: str, field_errors: list[dict] | None = None):
        super().__init__(message)
        self.field_errors = field_errors or []


class NotFound(BookingError):
    status_code = STATUS_NOT_FOUND


class CapacityExceeded(BookingError):
    status_code = STATUS_CONFLICT

    def __init__(self, message: str = MSG_SLOT_FULL, occupied: int = 0, capacity: int = 0):
        super().__init__(message)
        self.occupied = occupied
        self.capacity = capacity


class StorageError(BookingError):
    """Database failure. The client only ever sees "Failed to <action>"."""

    status_code = STATUS_INTERNAL_ERROR

    def __init__(self, action: str, retryable: bool = False):
        super().__init__(f"Failed to {action}")
        self.action = action
        self.retryable = retryable


class StorageTimeout(StorageError):
    """A statement or lock wait ran past DB_STATEMENT_TIMEOUT_MS."""


def _is_timeout(exc: sa_exc.DBAPIError) -> bool:
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode in _TIMEOUT_PGCODES:
        return True
    msg = str(exc.orig).lower()
    return (
        "statement timeout" in msg
        or "canceling statement" in msg
        or "lock timeout" in msg
        or "database is locked" in msg
    )


def translate_storage_error(exc: sa_exc.SQLAlchemyError, action: str) -> StorageError:
    """Map a SQLAlchemy exception onto the storage part of the taxonomy."""
    if isinstance(exc, sa_exc.TimeoutError):
        # QueuePool checkout timed out: every connection is busy
        return StorageError(action, retryable=True)
    if isinstance(exc, sa_exc.OperationalError) and _is_timeout(exc):
        return StorageTimeout(action)
    return StorageError(action)


@contextmanager
def storage_errors(action: str, session=None) -> Iterator[None]:
    """Translate database failures raised inside the block, rolling back `session`."""
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        if session is not None:
            session.rollback()
        raise translate_storage_error(exc, action) from exc
