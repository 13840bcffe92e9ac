"""
Tests for the employee record repository
"""
import json
from datetime import datetime

import pytest

from hrm.constants import ROLE_HR_STAFF, ROLE_VIEWER
from hrm.core.errors import DuplicateKey, NotFound, PermissionDenied, Unauthenticated, ValidationError
from hrm.models.audit_log import AuditLog
from hrm.models.employee import Employee
from hrm.schemas.employee import EmployeeFilters, EmployeeIn
from hrm.services import employee_service


def _create(db, payload, actor, **overrides):
    return employee_service.create_employee(db, EmployeeIn(**payload(**overrides)), actor=actor)


def _audit(db, action):
    return (
        db.query(AuditLog)
        .filter(AuditLog.entity_type == "EMPLOYEE", AuditLog.action == action)
        .order_by(AuditLog.id)
        .all()
    )


def test_create_and_get(admin_session, db, employee_payload):
    created = _create(db, employee_payload, admin_session)
    assert created.epf_number == "E001"
    assert created.created_at is not None

    fetched = employee_service.get_employee(db, "E001")
    assert fetched.full_name == "Amal Bandara Perera"
    assert fetched.working_status == "active"


def test_create_defaults_working_status(admin_session, db, employee_payload):
    created = _create(db, employee_payload, admin_session, working_status="")
    assert created.working_status == "active"


def test_create_duplicate_epf_rejected(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session)
    with pytest.raises(DuplicateKey, match="E001"):
        _create(db, employee_payload, admin_session, full_name="Someone Else")
    assert db.query(Employee).count() == 1


def test_create_requires_add_permission(db, user_factory, employee_payload):
    viewer = user_factory(db, "viewer_one", ROLE_VIEWER)
    with pytest.raises(PermissionDenied):
        _create(db, employee_payload, viewer)
    assert db.query(Employee).count() == 0
    assert _audit(db, "CREATE") == []


def test_create_requires_session(db, employee_payload):
    with pytest.raises(Unauthenticated):
        employee_service.create_employee(db, EmployeeIn(**employee_payload()), actor=None)


def test_hr_staff_can_add_but_not_edit(db, user_factory, employee_payload):
    staff = user_factory(db, "staff_one", ROLE_HR_STAFF)
    _create(db, employee_payload, staff)
    with pytest.raises(PermissionDenied):
        employee_service.update_employee(
            db, EmployeeIn(**employee_payload(full_name="Changed")), actor=staff
        )
    assert employee_service.get_employee(db, "E001").full_name == "Amal Bandara Perera"


def test_create_writes_audit_snapshot(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session)
    entries = _audit(db, "CREATE")
    assert len(entries) == 1
    entry = entries[0]
    assert entry.username == "admin"
    assert entry.user_id == admin_session.user_id
    assert entry.entity_id == "E001"
    assert entry.old_value is None
    assert json.loads(entry.new_value)["full_name"] == "Amal Bandara Perera"


def test_update_replaces_full_row_and_audits(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session)
    created_at = employee_service.get_employee(db, "E001").created_at

    changed = employee_payload(full_name="Amal B. Perera", department="HR", mobile_1=None)
    assert employee_service.update_employee(db, EmployeeIn(**changed), actor=admin_session) == 1

    updated = employee_service.get_employee(db, "E001")
    assert updated.full_name == "Amal B. Perera"
    assert updated.department == "HR"
    assert updated.mobile_1 is None
    assert updated.created_at == created_at

    entry = _audit(db, "UPDATE")[0]
    assert json.loads(entry.old_value)["department"] == "Finance"
    assert json.loads(entry.new_value)["department"] == "HR"


def test_update_missing_employee_is_noop(admin_session, db, employee_payload):
    result = employee_service.update_employee(
        db, EmployeeIn(**employee_payload("E404")), actor=admin_session
    )
    assert result == 0
    assert db.query(Employee).count() == 0
    assert _audit(db, "UPDATE") == []


def test_delete_then_get_not_found(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session)
    assert employee_service.delete_employee(db, "E001", actor=admin_session) is True

    with pytest.raises(NotFound):
        employee_service.get_employee(db, "E001")

    entry = _audit(db, "DELETE")[0]
    assert json.loads(entry.old_value)["epf_number"] == "E001"
    assert entry.new_value is None


def test_delete_missing_employee_is_noop(admin_session, db):
    assert employee_service.delete_employee(db, "E404", actor=admin_session) is False
    assert _audit(db, "DELETE") == []


def test_delete_requires_permission(admin_session, db, user_factory, employee_payload):
    _create(db, employee_payload, admin_session)
    staff = user_factory(db, "staff_two", ROLE_HR_STAFF)
    with pytest.raises(PermissionDenied):
        employee_service.delete_employee(db, "E001", actor=staff)
    assert db.query(Employee).count() == 1


def test_list_orders_by_epf_number(admin_session, db, employee_payload):
    for epf in ("E003", "E001", "E002"):
        _create(db, employee_payload, admin_session, epf_number=epf)
    db.query(Employee).filter(Employee.epf_number == "E001").update({"created_at": datetime(2024, 1, 3)})
    db.expire_all()

    epfs = [e.epf_number for e in employee_service.list_employees(db)]
    assert epfs == ["E001", "E002", "E003"]


def test_list_filters(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session, epf_number="EPF100", department="Finance")
    _create(db, employee_payload, admin_session, epf_number="EPF200", department="HR")
    _create(
        db, employee_payload, admin_session,
        epf_number="X300", department="HR", working_status="resign", transport_route="Route 2",
    )

    def epfs(**filters):
        return sorted(e.epf_number for e in employee_service.list_employees(db, EmployeeFilters(**filters)))

    assert epfs() == ["EPF100", "EPF200", "X300"]
    assert epfs(epf_number="EPF") == ["EPF100", "EPF200"]
    assert epfs(epf_number="00") == ["EPF100", "EPF200", "X300"]
    assert epfs(department="HR") == ["EPF200", "X300"]
    assert epfs(department="HR", working_status="active") == ["EPF200"]
    assert epfs(transport_route="Route 2") == ["X300"]
    # blank fields are ignored
    assert epfs(department="", working_status="", transport_route="") == ["EPF100", "EPF200", "X300"]


def test_epf_filter_treats_wildcards_literally(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session, epf_number="A_1")
    _create(db, employee_payload, admin_session, epf_number="AB1")
    found = employee_service.list_employees(db, EmployeeFilters(epf_number="_"))
    assert [e.epf_number for e in found] == ["A_1"]


def test_filter_values_are_not_sql(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session)
    found = employee_service.list_employees(db, EmployeeFilters(department="x' OR '1'='1"))
    assert found == []
    assert db.query(Employee).count() == 1


def test_distinct_values_and_filter_options(admin_session, db, employee_payload):
    _create(db, employee_payload, admin_session, epf_number="E1", department="HR", allocation=None)
    _create(db, employee_payload, admin_session, epf_number="E2", department="Finance", allocation="")
    _create(db, employee_payload, admin_session, epf_number="E3", department="HR", allocation="Plant")

    assert employee_service.get_distinct_values(db, "department") == ["Finance", "HR"]
    assert employee_service.get_distinct_values(db, "allocation") == ["Plant"]

    options = employee_service.get_filter_options(db)
    assert options.departments == ["Finance", "HR"]
    assert options.transport_routes == ["Route 1"]
    assert options.police_areas == ["Colombo"]
    assert options.designations == ["Clerk"]
    assert options.allocations == ["Plant"]


def test_distinct_values_rejects_unknown_field(db):
    with pytest.raises(ValidationError):
        employee_service.get_distinct_values(db, "password_hash")


def test_employee_input_requires_names(employee_payload):
    from pydantic import ValidationError as PydanticValidationError

    with pytest.raises(PydanticValidationError):
        EmployeeIn(**employee_payload(full_name="  "))
