"""
Central error handling for the HRM records system

Domain failures are raised as HRMError subclasses inside services and turned
into a single user-facing string at the command boundary.
"""
import logging
import traceback
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class HRMError(Exception):
    """Base class for every failure that may be reported to the operator"""

    default_detail = "Operation failed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(HRMError):
    default_detail = "Not logged in"


class PermissionDenied(HRMError):
    default_detail = "Permission denied"


class NotFound(HRMError):
    default_detail = "Record not found"


class DuplicateKey(HRMError):
    default_detail = "Record already exists"


class ValidationError(HRMError):
    default_detail = "Invalid input"


class AuthenticationFailed(HRMError):
    default_detail = "Invalid username or password"


class IOFailure(HRMError):
    default_detail = "File operation failed"


class SelfDeleteRejected(HRMError):
    default_detail = "Cannot delete your own account"


def format_validation_error(exc: PydanticValidationError) -> str:
    """Collapse pydantic validation errors into one readable line"""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Validation error: " + "; ".join(parts)


def error_message(exc: Exception, app_env: str = "local") -> str:
    """
    Convert any exception raised below the boundary into a user-facing string

    Does not leak internal error details in production.

    Args:
        exc: Exception instance
        app_env: Current APP_ENV value

    Returns:
        Descriptive error message
    """
    if isinstance(exc, HRMError):
        return exc.detail

    if isinstance(exc, PydanticValidationError):
        return format_validation_error(exc)

    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    if app_env != "prod":
        logger.debug(f"Traceback: {traceback.format_exc()}")
        return f"Internal error: {exc}"
    return "Internal error"
