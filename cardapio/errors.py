"""Error taxonomy shared by every layer, plus database error classification."""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Stable identifiers for every failure the service reports."""

    VALIDATION = "validation_error"
    BUSINESS_LOGIC = "business_logic_error"
    NOT_FOUND = "not_found"
    REFERENCED_RESOURCE_NOT_FOUND = "referenced_resource_not_found"
    CONFLICT = "conflict"
    FOREIGN_KEY_CONSTRAINT = "foreign_key_constraint"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    FORBIDDEN = "forbidden"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    PROVISIONING = "provisioning_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base class. Subclasses pin `kind`; `details` holds (field, message) pairs."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: list[tuple[str, str]] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"{field}: {message}", details=[(field, message)])


class BusinessLogicError(ValidationError):
    """Field combination is well-formed but inconsistent with the promotion type."""

    kind = ErrorKind.BUSINESS_LOGIC


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class ReferencedResourceNotFoundError(AppError):
    kind = ErrorKind.REFERENCED_RESOURCE_NOT_FOUND


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT


class ForeignKeyConstraintError(AppError):
    """Insert/update referenced a row that does not exist."""

    kind = ErrorKind.FOREIGN_KEY_CONSTRAINT


class ForeignKeyViolationError(AppError):
    """Delete blocked by dependent rows."""

    kind = ErrorKind.FOREIGN_KEY_VIOLATION


class ForbiddenError(AppError):
    kind = ErrorKind.FORBIDDEN


class InvalidTokenError(AppError):
    kind = ErrorKind.INVALID_TOKEN


class ExpiredTokenError(AppError):
    kind = ErrorKind.EXPIRED_TOKEN


class InvalidCredentialsError(AppError):
    kind = ErrorKind.INVALID_CREDENTIALS


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


class ProvisioningError(InternalError):
    kind = ErrorKind.PROVISIONING


# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NOT_NULL_VIOLATION = "23502"
DUPLICATE_SCHEMA = "42P06"
DUPLICATE_TABLE = "42P07"


def _driver_error(exc: BaseException):
    """Unwrap SQLAlchemy's DBAPIError down to the driver exception."""
    orig = getattr(exc, "orig", None) or exc
    return getattr(orig, "__cause__", None) or orig


def sqlstate_of(exc: BaseException) -> str | None:
    """SQLSTATE of a database error, looking through the SQLAlchemy and adapter wrappers."""
    for candidate in (getattr(exc, "orig", None), _driver_error(exc), exc):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def constraint_of(exc: BaseException) -> str | None:
    driver = _driver_error(exc)
    return getattr(driver, "constraint_name", None) or getattr(exc, "constraint_name", None)


def classify_db_error(exc: BaseException, deleting: bool = False) -> AppError:
    """
    Map a database exception to the most specific AppError.

    `deleting` tells a foreign key failure on DELETE (dependent rows exist)
    apart from one on INSERT/UPDATE (referenced row missing).
    """
    if isinstance(exc, AppError):
        return exc

    code = sqlstate_of(exc)
    constraint = constraint_of(exc)

    if code == UNIQUE_VIOLATION:
        return ConflictError(
            "A record with one of the unique values provided already exists"
            + (f" ({constraint})" if constraint else "")
        )
    if code == FOREIGN_KEY_VIOLATION:
        if deleting:
            return ForeignKeyViolationError(
                "The record cannot be deleted because other records reference it"
            )
        return ForeignKeyConstraintError("A referenced record does not exist")
    if code in (CHECK_VIOLATION, NOT_NULL_VIOLATION) or (code or "").startswith("22"):
        return ValidationError(
            "The data violates a database constraint"
            + (f" ({constraint})" if constraint else "")
        )

    logger.error("Unclassified database error (sqlstate=%s): %s", code, exc)
    return InternalError("Unexpected database error")
