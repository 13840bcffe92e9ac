"""
Audit logging service
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from hrm.constants import AUDIT_TOP_ACTIONS, AUDIT_TOP_USERS, AUDIT_WEEK_DAYS, SYSTEM_USERNAME
from hrm.core.deps import require_permission
from hrm.core.permissions import Capability
from hrm.core.session import UserSession
from hrm.models.audit_log import AuditLog
from hrm.schemas.audit import (
    ActionCount,
    AuditLogFilters,
    AuditLogOut,
    AuditLogResult,
    AuditLogSummary,
    CreateAuditLogRequest,
    UserActivity,
)
from hrm.utils.datetime_utils import days_ago, today_local
from hrm.utils.json_serializer import dumps_snapshot
from hrm.utils.query_filters import FieldPredicate, Match, compose

logger = logging.getLogger(__name__)

AUDIT_FILTERS = {
    "username": FieldPredicate(AuditLog.username, Match.CONTAINS),
    "action": FieldPredicate(AuditLog.action),
    "entity_type": FieldPredicate(AuditLog.entity_type),
    "start": FieldPredicate(AuditLog.created_at, Match.AT_LEAST),
    "end": FieldPredicate(AuditLog.created_at, Match.BEFORE),
}


def _day_start(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min) if day is not None else None


def log_audit(
    db: Session,
    actor: Optional[UserSession],
    action: str,
    entity_type: str,
    entity_id: Optional[Any] = None,
    old_value: Optional[Any] = None,
    new_value: Optional[Any] = None,
    details: Optional[str] = None,
) -> Optional[AuditLog]:
    """
    Append an audit log entry

    The insert runs in a SAVEPOINT; any failure is logged and swallowed so the
    operation being audited is never blocked by it.

    Args:
        db: Database session
        actor: Current session, or None (recorded as "system")
        action: Action tag (e.g., "CREATE", "UPDATE", "DELETE", "LOGIN")
        entity_type: "EMPLOYEE", "USER", "DATABASE" or "SYSTEM"
        entity_id: Key of the affected entity (optional)
        old_value: Snapshot before the change (optional)
        new_value: Snapshot after the change (optional)
        details: Human-readable description (optional)

    Returns:
        Created AuditLog instance, or None if the write failed
    """
    try:
        with db.begin_nested():
            entry = AuditLog(
                user_id=actor.user_id if actor else None,
                username=actor.username if actor else SYSTEM_USERNAME,
                action=action,
                entity_type=entity_type,
                entity_id=str(entity_id) if entity_id is not None else None,
                old_value=dumps_snapshot(old_value),
                new_value=dumps_snapshot(new_value),
                details=details,
            )
            db.add(entry)
        return entry
    except Exception as e:
        logger.warning(f"Failed to write audit log ({action} {entity_type} {entity_id}): {e}")
        return None


def query_audit_logs(
    db: Session,
    filters: AuditLogFilters,
    *,
    actor: Optional[UserSession],
    default_limit: int = 50,
    max_limit: int = 500,
) -> AuditLogResult:
    """Newest-first page of entries matching the filters, plus the total match count"""
    require_permission(actor, Capability.VIEW_AUDIT_LOGS)

    end_exclusive = filters.end_date + timedelta(days=1) if filters.end_date else None
    clauses = compose([
        (AUDIT_FILTERS["username"], filters.username),
        (AUDIT_FILTERS["action"], filters.action),
        (AUDIT_FILTERS["entity_type"], filters.entity_type),
        (AUDIT_FILTERS["start"], _day_start(filters.start_date)),
        (AUDIT_FILTERS["end"], _day_start(end_exclusive)),
    ])

    query = db.query(AuditLog).filter(*clauses)
    total_count = query.count()

    limit = min(filters.limit or default_limit, max_limit)
    rows = (
        query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .offset(filters.offset)
        .all()
    )
    return AuditLogResult(
        logs=[AuditLogOut.model_validate(row) for row in rows],
        total_count=total_count,
    )


def get_audit_summary(
    db: Session,
    *,
    actor: Optional[UserSession],
    today: Optional[date] = None,
) -> AuditLogSummary:
    """Totals, today's and the trailing week's counts, top actions, most active users"""
    require_permission(actor, Capability.VIEW_AUDIT_LOGS)

    today = today or today_local()
    today_start = _day_start(today)
    week_start = _day_start(days_ago(AUDIT_WEEK_DAYS, today))

    total = db.query(func.count(AuditLog.id)).scalar() or 0
    today_count = (
        db.query(func.count(AuditLog.id))
        .filter(AuditLog.created_at >= today_start, AuditLog.created_at < today_start + timedelta(days=1))
        .scalar() or 0
    )
    week_count = db.query(func.count(AuditLog.id)).filter(AuditLog.created_at >= week_start).scalar() or 0

    count_col = func.count(AuditLog.id).label("count")
    actions = (
        db.query(AuditLog.action, count_col)
        .group_by(AuditLog.action)
        .order_by(count_col.desc(), AuditLog.action.asc())
        .limit(AUDIT_TOP_ACTIONS)
        .all()
    )
    users = (
        db.query(AuditLog.username, count_col)
        .filter(AuditLog.created_at >= week_start)
        .group_by(AuditLog.username)
        .order_by(count_col.desc(), AuditLog.username.asc())
        .limit(AUDIT_TOP_USERS)
        .all()
    )

    return AuditLogSummary(
        total_logs=total,
        today_logs=today_count,
        week_logs=week_count,
        action_breakdown=[ActionCount(action=a, count=c) for a, c in actions],
        active_users=[UserActivity(username=u, count=c) for u, c in users],
    )


def record_client_event(
    db: Session,
    request: CreateAuditLogRequest,
    *,
    actor: Optional[UserSession],
) -> Optional[AuditLog]:
    """Audit entry reported by the client, recorded under the current session or "system" """
    return log_audit(
        db,
        actor=actor,
        action=request.action,
        entity_type=request.entity_type,
        entity_id=request.entity_id,
        old_value=request.old_value,
        new_value=request.new_value,
        details=request.details,
    )
