"""
Tests for database file export, import and info
"""
import sqlite3

import pytest

from hrm.api.router import invoke
from hrm.constants import ROLE_HR_MANAGER
from hrm.core.errors import IOFailure, PermissionDenied, ValidationError
from hrm.services import database_service
from hrm.services.database_service import format_file_size


@pytest.mark.parametrize("size,expected", [
    (0, "0 bytes"),
    (1023, "1023 bytes"),
    (1024, "1.00 KB"),
    (1536, "1.50 KB"),
    (5 * 1024 * 1024, "5.00 MB"),
    (3 * 1024 ** 3, "3.00 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_database_info(ctx, admin_session, employee_payload):
    invoke(ctx, "create_employee", employee=employee_payload())
    info = invoke(ctx, "get_database_info").data
    assert info.path == str(ctx.settings.database_path)
    assert info.size_bytes > 0
    assert info.size_formatted.endswith(("bytes", "KB", "MB"))
    assert info.employee_count == 1
    assert info.user_count == 1


def test_export_import_round_trip(ctx, admin_session, employee_payload, tmp_path):
    for epf in ("E1", "E2", "E3"):
        assert invoke(ctx, "create_employee", employee=employee_payload(epf)).error is False
    invoke(ctx, "create_user", user={
        "username": "jane", "password": "secret123", "full_name": "Jane", "role": "viewer",
    })
    exported_employees = invoke(ctx, "get_employees").data
    exported_users = invoke(ctx, "get_all_users").data

    destination = tmp_path / "export.db"
    response = invoke(ctx, "export_database", destination_path=str(destination))
    assert response.error is False
    assert str(destination) in response.data
    assert destination.is_file()

    # diverge from the export
    invoke(ctx, "delete_employee", epf_number="E1")
    invoke(ctx, "create_employee", employee=employee_payload("E9"))

    response = invoke(ctx, "import_database", source_path=str(destination))
    assert response.error is False, response.detail
    assert ctx.settings.backup_path.is_file()

    imported_employees = invoke(ctx, "get_employees").data
    imported_users = invoke(ctx, "get_all_users").data
    assert [e.model_dump() for e in imported_employees] == [e.model_dump() for e in exported_employees]
    assert [u.username for u in imported_users] == [u.username for u in exported_users]


def test_import_is_audited_and_backup_holds_previous_data(ctx, admin_session, employee_payload, tmp_path):
    destination = tmp_path / "empty_export.db"
    invoke(ctx, "export_database", destination_path=str(destination))
    invoke(ctx, "create_employee", employee=employee_payload("E1"))

    assert invoke(ctx, "import_database", source_path=str(destination)).error is False
    assert invoke(ctx, "get_database_info").data.employee_count == 0

    with sqlite3.connect(ctx.settings.backup_path) as conn:
        assert conn.execute("SELECT COUNT(*) FROM employees").fetchone()[0] == 1

    logs = invoke(ctx, "get_audit_logs", filters={"entity_type": "DATABASE"}).data
    assert [log.action for log in logs.logs][:1] == ["IMPORT"]


def test_import_rejects_non_database_file(ctx, admin_session, tmp_path):
    bogus = tmp_path / "notes.db"
    bogus.write_bytes(b"this is not a database file at all" * 100)
    with pytest.raises(ValidationError, match="Invalid database file"):
        database_service.import_database(
            ctx.database, bogus, ctx.settings.backup_path, actor=admin_session
        )
    assert not ctx.settings.backup_path.exists()


def test_import_rejects_database_without_hrm_tables(ctx, admin_session, tmp_path):
    other = tmp_path / "other.db"
    with sqlite3.connect(other) as conn:
        conn.execute("CREATE TABLE employees (epf_number TEXT PRIMARY KEY)")
    with pytest.raises(ValidationError, match="users"):
        database_service.import_database(
            ctx.database, other, ctx.settings.backup_path, actor=admin_session
        )


def test_import_missing_source(ctx, admin_session, tmp_path):
    with pytest.raises(IOFailure, match="not found"):
        database_service.import_database(
            ctx.database, tmp_path / "missing.db", ctx.settings.backup_path, actor=admin_session
        )


def test_export_and_import_require_backup_permission(ctx, user_factory, tmp_path):
    with ctx.database.session_scope() as s:
        manager = user_factory(s, "manager_db", ROLE_HR_MANAGER)

    with pytest.raises(PermissionDenied):
        database_service.export_database(ctx.database, tmp_path / "x.db", actor=manager)
    with pytest.raises(PermissionDenied):
        database_service.import_database(
            ctx.database, ctx.settings.database_path, ctx.settings.backup_path, actor=manager
        )
    assert not (tmp_path / "x.db").exists()
