"""
Authentication service - login, logout bookkeeping, own-password change
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from hrm.constants import ACTION_LOGIN, ACTION_LOGOUT, ACTION_PASSWORD_CHANGE, ENTITY_USER
from hrm.core.deps import require_session
from hrm.core.errors import AuthenticationFailed, NotFound, ValidationError
from hrm.core.security import hash_password, validate_password, verify_password
from hrm.core.session import UserSession
from hrm.models.user import User
from hrm.services.audit_service import log_audit
from hrm.utils.datetime_utils import now_local

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
ACCOUNT_DEACTIVATED = "Account is deactivated. Please contact administrator."


def session_for(user: User) -> UserSession:
    """Capture a user's identity and current permission set as a session"""
    return UserSession(
        user_id=user.id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
        department_access=user.department_access,
        permissions=user.permissions,
    )


def authenticate(db: Session, username: str, password: str) -> UserSession:
    """
    Check credentials and open a session

    Updates last_login and writes a LOGIN audit entry on success.

    Args:
        db: Database session
        username: Login name
        password: Plain password

    Returns:
        UserSession carrying the user's permission set

    Raises:
        AuthenticationFailed: Unknown user, wrong password or deactivated account
    """
    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.info(f"Failed login attempt for username: {username}")
        raise AuthenticationFailed(INVALID_CREDENTIALS)

    if not user.is_active:
        logger.info(f"Login refused for deactivated account: {username}")
        raise AuthenticationFailed(ACCOUNT_DEACTIVATED)

    user.last_login = now_local()
    db.flush()

    session = session_for(user)
    log_audit(
        db,
        actor=session,
        action=ACTION_LOGIN,
        entity_type=ENTITY_USER,
        entity_id=user.id,
        details=f"User logged in: {user.username}",
    )
    logger.info(f"User {user.username} logged in")
    return session


def record_logout(db: Session, session: Optional[UserSession]) -> None:
    """Write the LOGOUT audit entry for a session that is being closed"""
    if session is None:
        return
    log_audit(
        db,
        actor=session,
        action=ACTION_LOGOUT,
        entity_type=ENTITY_USER,
        entity_id=session.user_id,
        details=f"User logged out: {session.username}",
    )
    logger.info(f"User {session.username} logged out")


def change_own_password(
    db: Session,
    current_password: str,
    new_password: str,
    *,
    actor: Optional[UserSession] = None,
) -> None:
    """
    Change the logged-in operator's password after checking the current one

    Raises:
        Unauthenticated: No active session
        AuthenticationFailed: Current password does not match
        ValidationError: New password too short
    """
    actor = require_session(actor)
    user = db.get(User, actor.user_id)
    if user is None:
        raise NotFound("User not found")

    if not verify_password(current_password, user.password_hash):
        raise AuthenticationFailed("Current password is incorrect")

    try:
        validate_password(new_password)
    except ValueError as e:
        raise ValidationError(str(e)) from e

    user.password_hash = hash_password(new_password)
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_PASSWORD_CHANGE,
        entity_type=ENTITY_USER,
        entity_id=user.id,
        details=f"Password changed for user: {user.username}",
    )
