"""
Tests for the command boundary
"""
from hrm.api.router import COMMANDS, invoke
from hrm.schemas.common import CommandResponse

EXPECTED_COMMANDS = {
    "login", "logout", "get_current_user", "change_own_password",
    "create_user", "get_all_users", "update_user", "delete_user", "reset_user_password",
    "get_employees", "get_employee_by_epf", "create_employee", "update_employee", "delete_employee",
    "get_distinct_departments", "get_distinct_transport_routes", "get_distinct_police_areas",
    "get_distinct_designations", "get_distinct_allocations", "get_filter_options",
    "get_dashboard_stats", "export_employees_csv",
    "export_database", "import_database", "get_database_info",
    "get_audit_logs", "get_audit_log_summary", "create_audit_log",
    "save_employee_image", "get_employee_image",
}


def test_all_commands_registered():
    assert set(COMMANDS) == EXPECTED_COMMANDS


def test_unknown_command(ctx):
    response = invoke(ctx, "drop_everything")
    assert isinstance(response, CommandResponse)
    assert response.error is True
    assert "Unknown command" in response.detail


def test_mutation_without_login(ctx, employee_payload):
    response = invoke(ctx, "create_employee", employee=employee_payload())
    assert response.error is True
    assert response.detail == "Not logged in"


def test_employee_lifecycle(ctx, admin_session, employee_payload):
    created = invoke(ctx, "create_employee", employee=employee_payload())
    assert created.error is False
    assert created.data.epf_number == "E001"

    duplicate = invoke(ctx, "create_employee", employee=employee_payload())
    assert duplicate.error is True
    assert duplicate.detail == "Employee with EPF number 'E001' already exists"

    updated = invoke(ctx, "update_employee", employee=employee_payload(designation="Manager"))
    assert updated.data == 1
    assert invoke(ctx, "get_employee_by_epf", epf_number="E001").data.designation == "Manager"

    assert invoke(ctx, "get_distinct_designations").data == ["Manager"]
    assert invoke(ctx, "get_filter_options").data.departments == ["Finance"]
    assert invoke(ctx, "get_dashboard_stats").data.total_employees == 1

    assert invoke(ctx, "delete_employee", epf_number="E001").data is True
    missing = invoke(ctx, "get_employee_by_epf", epf_number="E001")
    assert missing.error is True
    assert missing.detail == "Employee not found: E001"


def test_validation_errors_become_messages(ctx, admin_session, employee_payload):
    payload = employee_payload()
    del payload["full_name"]
    response = invoke(ctx, "create_employee", employee=payload)
    assert response.error is True
    assert response.detail.startswith("Validation error")
    assert "full_name" in response.detail


def test_wrong_arguments_become_internal_error(ctx):
    response = invoke(ctx, "get_employee_by_epf", epf="E001")
    assert response.error is True
    assert response.detail.startswith("Internal error")


def test_internal_errors_hidden_in_prod(ctx):
    ctx.settings = ctx.settings.model_copy(update={"APP_ENV": "prod"})
    response = invoke(ctx, "get_employee_by_epf", epf="E001")
    assert response.detail == "Internal error"


def test_admin_cannot_delete_self_through_boundary(ctx, admin_session):
    response = invoke(ctx, "delete_user", user_id=admin_session.user_id)
    assert response.error is True
    assert response.detail == "Cannot delete your own account"


def test_viewer_denied_mutations(ctx, admin_session, employee_payload):
    created = invoke(ctx, "create_user", user={
        "username": "viewer_one", "password": "secret123", "full_name": "Viewer One", "role": "viewer",
    })
    assert created.error is False
    assert created.data.permissions.can_add_employees is False

    assert invoke(ctx, "login", username="viewer_one", password="secret123").error is False
    denied = invoke(ctx, "create_employee", employee=employee_payload())
    assert denied.error is True
    assert denied.detail.startswith("Permission denied")
    assert invoke(ctx, "get_employees").data == []
    assert invoke(ctx, "get_audit_logs").detail.startswith("Permission denied")


def test_audit_commands(ctx, admin_session):
    assert invoke(ctx, "create_audit_log", entry={"action": "EXPORT", "entity_type": "EMPLOYEE"}).error is False

    logs = invoke(ctx, "get_audit_logs", filters={"action": "EXPORT"}).data
    assert logs.total_count == 1
    assert logs.logs[0].username == "admin"

    summary = invoke(ctx, "get_audit_log_summary").data
    assert summary.total_logs >= 3


def test_change_own_password_through_boundary(ctx, admin_session):
    response = invoke(ctx, "change_own_password", current_password="admin123", new_password="n3w-pass")
    assert response.error is False
    invoke(ctx, "logout")
    assert invoke(ctx, "login", username="admin", password="admin123").error is True
    assert invoke(ctx, "login", username="admin", password="n3w-pass").error is False


def test_reset_user_password_through_boundary(ctx, admin_session):
    user = invoke(ctx, "create_user", user={
        "username": "clerk", "password": "secret123", "full_name": "Clerk", "role": "hr_staff",
    }).data
    too_short = invoke(ctx, "reset_user_password", user_id=user.id, new_password="123")
    assert too_short.error is True
    assert invoke(ctx, "reset_user_password", user_id=user.id, new_password="reset-123").error is False
    assert invoke(ctx, "login", username="clerk", password="reset-123").error is False
