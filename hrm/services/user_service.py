"""
User service - administration of system users
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hrm.constants import (
    ACTION_CREATE,
    ACTION_DELETE,
    ACTION_PASSWORD_RESET,
    ACTION_UPDATE,
    ENTITY_USER,
    VALID_ROLES,
)
from hrm.core.deps import reject_self_delete, require_permission, require_session, requires
from hrm.core.errors import DuplicateKey, NotFound, ValidationError
from hrm.core.permissions import Capability, PermissionSet, derive_permissions
from hrm.core.security import hash_password, validate_password
from hrm.core.session import UserSession
from hrm.models.user import User
from hrm.schemas.user import CreateUserRequest, UpdateUserRequest, UserInfo
from hrm.services.audit_service import log_audit
from hrm.utils.enums import enum_value

logger = logging.getLogger(__name__)


def _validate_role(role) -> str:
    role = enum_value(role)
    if role not in VALID_ROLES:
        raise ValidationError("Invalid role specified")
    return role


def _checked_password(password: str) -> str:
    try:
        return validate_password(password)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def _resolve_permissions(role: str, permissions: Optional[PermissionSet]) -> PermissionSet:
    """Explicit permissions win; otherwise the role's defaults apply"""
    return permissions if permissions is not None else derive_permissions(role)


def user_snapshot(user: User) -> dict:
    """Audit image of a user row; never includes the password digest"""
    return UserInfo.model_validate(user).model_dump(mode="json")


@requires(Capability.MANAGE_USERS)
def create_user(
    db: Session,
    user_data: CreateUserRequest,
    *,
    actor: Optional[UserSession] = None,
) -> UserInfo:
    """
    Create a system user

    Args:
        db: Database session
        user_data: New user; permissions default to the role's set when omitted
        actor: Current session (needs can_manage_users)

    Returns:
        The created user

    Raises:
        ValidationError: Unknown role or password too short
        DuplicateKey: Username taken
    """
    role = _validate_role(user_data.role)
    password = _checked_password(user_data.password)

    if db.query(User).filter(User.username == user_data.username).first() is not None:
        raise DuplicateKey("Username already exists")

    user = User(
        username=user_data.username,
        password_hash=hash_password(password),
        full_name=user_data.full_name,
        role=role,
        department_access=user_data.department_access,
        is_active=True,
    )
    user.apply_permissions(_resolve_permissions(role, user_data.permissions))
    db.add(user)
    try:
        db.flush()
    except IntegrityError as e:
        raise DuplicateKey("Username already exists") from e

    db.refresh(user)
    log_audit(
        db,
        actor=actor,
        action=ACTION_CREATE,
        entity_type=ENTITY_USER,
        entity_id=user.id,
        new_value=user_snapshot(user),
        details=f"Created user: {user.username}",
    )
    logger.info(f"User {user.username} created by {actor.username}")
    return UserInfo.model_validate(user)


@requires(Capability.MANAGE_USERS)
def list_users(db: Session, *, actor: Optional[UserSession] = None) -> List[UserInfo]:
    """All users, newest first"""
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return [UserInfo.model_validate(u) for u in users]


@requires(Capability.MANAGE_USERS)
def update_user(
    db: Session,
    user_data: UpdateUserRequest,
    *,
    actor: Optional[UserSession] = None,
) -> int:
    """
    Full update of a user's profile, role, activation and permissions

    A missing user id is a silent no-op. Sessions already open for the
    target keep the permissions captured at their login.

    Returns:
        Number of rows changed (0 or 1)
    """
    role = _validate_role(user_data.role)
    user = db.get(User, user_data.user_id)
    if user is None:
        logger.info(f"Update skipped, no user {user_data.user_id}")
        return 0

    before = user_snapshot(user)
    user.full_name = user_data.full_name
    user.role = role
    user.department_access = user_data.department_access
    user.is_active = user_data.is_active
    user.apply_permissions(_resolve_permissions(role, user_data.permissions))
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_UPDATE,
        entity_type=ENTITY_USER,
        entity_id=user.id,
        old_value=before,
        new_value=user_snapshot(user),
        details=f"Updated user: {user.username}",
    )
    return 1


def delete_user(
    db: Session,
    user_id: int,
    *,
    actor: Optional[UserSession] = None,
) -> bool:
    """
    Delete a user; a missing id is a silent no-op

    Raises:
        Unauthenticated: No active session
        SelfDeleteRejected: Target is the operator's own account
        PermissionDenied: Session lacks can_manage_users
    """
    actor = require_session(actor)
    reject_self_delete(actor, user_id)
    require_permission(actor, Capability.MANAGE_USERS)

    user = db.get(User, user_id)
    if user is None:
        return False

    before = user_snapshot(user)
    db.delete(user)
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_DELETE,
        entity_type=ENTITY_USER,
        entity_id=user_id,
        old_value=before,
        details=f"Deleted user: {before['username']}",
    )
    logger.info(f"User {before['username']} deleted by {actor.username}")
    return True


@requires(Capability.MANAGE_USERS)
def reset_user_password(
    db: Session,
    user_id: int,
    new_password: str,
    *,
    actor: Optional[UserSession] = None,
) -> None:
    """
    Set another user's password without knowing the old one

    Raises:
        ValidationError: Password too short
        NotFound: No such user
    """
    password = _checked_password(new_password)
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    user.password_hash = hash_password(password)
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_PASSWORD_RESET,
        entity_type=ENTITY_USER,
        entity_id=user.id,
        details=f"Password reset for user: {user.username}",
    )
