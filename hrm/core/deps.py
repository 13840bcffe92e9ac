"""
Authorization gate for mutating operations

Checks run purely against the session captured at login; permissions are
never re-read from the users table, so edits to a logged-in operator's
permissions apply from their next login.
"""
from functools import wraps
from typing import Optional

from hrm.core.errors import PermissionDenied, SelfDeleteRejected, Unauthenticated
from hrm.core.permissions import Capability
from hrm.core.session import UserSession


def require_session(session: Optional[UserSession]) -> UserSession:
    """Fail with Unauthenticated when nobody is logged in"""
    if session is None:
        raise Unauthenticated("Not logged in")
    return session


def require_permission(
    session: Optional[UserSession],
    capability: Capability,
    detail: Optional[str] = None,
) -> UserSession:
    """
    Gate an operation on one capability

    Args:
        session: Current session (None when logged out)
        capability: Capability the operation needs
        detail: Optional message for the denial

    Returns:
        The session, for chaining

    Raises:
        Unauthenticated: No active session
        PermissionDenied: Session lacks the capability
    """
    session = require_session(session)
    if not session.can(capability):
        raise PermissionDenied(detail or f"Permission denied. Required permission: {capability.value}")
    return session


def reject_self_delete(session: UserSession, target_user_id: int) -> None:
    """An operator may never delete their own account, whatever their permissions"""
    if session.user_id == target_user_id:
        raise SelfDeleteRejected("Cannot delete your own account")


def requires(capability: Capability, detail: Optional[str] = None):
    """
    Decorator factory for service functions whose keyword argument ``actor``
    carries the current session

    Usage:
        @requires(Capability.ADD_EMPLOYEES)
        def create_employee(db, employee_data, actor=None):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            require_permission(kwargs.get("actor"), capability, detail)
            return func(*args, **kwargs)
        return wrapper
    return decorator
