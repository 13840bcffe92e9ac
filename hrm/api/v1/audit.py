"""
Audit log commands
"""
from hrm.api.commands import CommandRouter
from hrm.schemas.audit import AuditLogFilters, AuditLogResult, AuditLogSummary, CreateAuditLogRequest
from hrm.services import audit_service

router = CommandRouter()


@router.command("get_audit_logs")
def get_audit_logs_command(ctx, filters=None) -> AuditLogResult:
    """Filtered, paginated audit entries (needs can_view_audit_logs)"""
    request = AuditLogFilters.model_validate(filters or {})
    with ctx.database.session_scope() as db:
        return audit_service.query_audit_logs(
            db,
            request,
            actor=ctx.sessions.get(),
            default_limit=ctx.settings.AUDIT_PAGE_SIZE,
            max_limit=ctx.settings.AUDIT_MAX_PAGE_SIZE,
        )


@router.command("get_audit_log_summary")
def get_audit_log_summary_command(ctx) -> AuditLogSummary:
    with ctx.database.session_scope() as db:
        return audit_service.get_audit_summary(db, actor=ctx.sessions.get())


@router.command("create_audit_log")
def create_audit_log_command(ctx, entry) -> None:
    request = CreateAuditLogRequest.model_validate(entry)
    with ctx.database.session_scope() as db:
        audit_service.record_client_event(db, request, actor=ctx.sessions.get())
