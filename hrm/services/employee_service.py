"""
Employee service - business logic for the employee record repository
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hrm.constants import ACTION_CREATE, ACTION_DELETE, ACTION_UPDATE, ENTITY_EMPLOYEE
from hrm.core.deps import requires
from hrm.core.errors import DuplicateKey, NotFound, ValidationError
from hrm.core.permissions import Capability
from hrm.core.session import UserSession
from hrm.models.employee import Employee
from hrm.schemas.employee import EmployeeFilters, EmployeeIn, EmployeeOut, FilterOptions
from hrm.services.audit_service import log_audit
from hrm.utils.query_filters import FieldPredicate, Match, compose

logger = logging.getLogger(__name__)

EMPLOYEE_FILTERS = {
    "epf_number": FieldPredicate(Employee.epf_number, Match.CONTAINS),
    "department": FieldPredicate(Employee.department),
    "transport_route": FieldPredicate(Employee.transport_route),
    "working_status": FieldPredicate(Employee.working_status),
}

# Columns offered as filter dropdown values
DISTINCT_FIELDS = {
    "department": Employee.department,
    "transport_route": Employee.transport_route,
    "police_area": Employee.police_area,
    "designation": Employee.designation,
    "allocation": Employee.allocation,
}

# Columns a full-row update replaces; the key and creation time never change
UPDATABLE_FIELDS = [
    name for name in EmployeeIn.model_fields if name != "epf_number"
]


def snapshot(employee: Employee) -> dict:
    """JSON-ready image of a stored row, used for audit before/after values"""
    return EmployeeOut.model_validate(employee).model_dump(mode="json")


def list_employees(db: Session, filters: Optional[EmployeeFilters] = None) -> List[EmployeeOut]:
    """
    Employees matching the filters, ordered by EPF number

    Args:
        db: Database session
        filters: Blank fields are ignored; epf_number matches as a substring

    Returns:
        List of EmployeeOut ordered by epf_number ascending
    """
    filters = filters or EmployeeFilters()
    clauses = compose([
        (predicate, getattr(filters, name)) for name, predicate in EMPLOYEE_FILTERS.items()
    ])
    rows = (
        db.query(Employee)
        .filter(*clauses)
        .order_by(Employee.epf_number.asc())
        .all()
    )
    return [EmployeeOut.model_validate(row) for row in rows]


def get_employee(db: Session, epf_number: str) -> EmployeeOut:
    """
    Fetch one employee by EPF number

    Raises:
        NotFound: No row with that key
    """
    employee = db.get(Employee, epf_number)
    if employee is None:
        raise NotFound(f"Employee not found: {epf_number}")
    return EmployeeOut.model_validate(employee)


@requires(Capability.ADD_EMPLOYEES)
def create_employee(
    db: Session,
    employee_data: EmployeeIn,
    *,
    actor: Optional[UserSession] = None,
) -> EmployeeOut:
    """
    Insert a new employee and audit it

    Args:
        db: Database session
        employee_data: Full record; epf_number is the caller-supplied key
        actor: Current session (needs can_add_employees)

    Returns:
        The stored record

    Raises:
        DuplicateKey: epf_number already used
    """
    if db.get(Employee, employee_data.epf_number) is not None:
        raise DuplicateKey(f"Employee with EPF number '{employee_data.epf_number}' already exists")

    employee = Employee(**employee_data.model_dump())
    db.add(employee)
    try:
        db.flush()
    except IntegrityError as e:
        raise DuplicateKey(f"Employee with EPF number '{employee_data.epf_number}' already exists") from e

    db.refresh(employee)
    stored = snapshot(employee)
    log_audit(
        db,
        actor=actor,
        action=ACTION_CREATE,
        entity_type=ENTITY_EMPLOYEE,
        entity_id=employee.epf_number,
        new_value=stored,
        details=f"Created employee: {employee.full_name}",
    )
    logger.info(f"Employee {employee.epf_number} created by {actor.username}")
    return EmployeeOut.model_validate(employee)


@requires(Capability.EDIT_EMPLOYEES)
def update_employee(
    db: Session,
    employee_data: EmployeeIn,
    *,
    actor: Optional[UserSession] = None,
) -> int:
    """
    Replace every mutable field of the employee keyed by employee_data.epf_number

    A key with no row is a silent no-op; nothing is written or audited.

    Returns:
        Number of rows changed (0 or 1)
    """
    employee = db.get(Employee, employee_data.epf_number)
    if employee is None:
        logger.info(f"Update skipped, no employee {employee_data.epf_number}")
        return 0

    before = snapshot(employee)
    for field in UPDATABLE_FIELDS:
        setattr(employee, field, getattr(employee_data, field))
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_UPDATE,
        entity_type=ENTITY_EMPLOYEE,
        entity_id=employee.epf_number,
        old_value=before,
        new_value=snapshot(employee),
        details=f"Updated employee: {employee.full_name}",
    )
    return 1


@requires(Capability.DELETE_EMPLOYEES)
def delete_employee(
    db: Session,
    epf_number: str,
    *,
    actor: Optional[UserSession] = None,
) -> bool:
    """
    Delete one employee; a missing key is a silent no-op

    Returns:
        True if a row was removed
    """
    employee = db.get(Employee, epf_number)
    if employee is None:
        return False

    before = snapshot(employee)
    db.delete(employee)
    db.flush()

    log_audit(
        db,
        actor=actor,
        action=ACTION_DELETE,
        entity_type=ENTITY_EMPLOYEE,
        entity_id=epf_number,
        old_value=before,
        details=f"Deleted employee: {before.get('full_name')}",
    )
    logger.info(f"Employee {epf_number} deleted by {actor.username}")
    return True


def get_distinct_values(db: Session, field: str) -> List[str]:
    """Sorted distinct non-empty values of one categorical column"""
    column = DISTINCT_FIELDS.get(field)
    if column is None:
        raise ValidationError(f"Unknown filter field: {field}")
    rows = (
        db.query(column)
        .filter(column.isnot(None), column != "")
        .distinct()
        .order_by(column.asc())
        .all()
    )
    return [value for (value,) in rows]


def get_filter_options(db: Session) -> FilterOptions:
    return FilterOptions(
        departments=get_distinct_values(db, "department"),
        transport_routes=get_distinct_values(db, "transport_route"),
        police_areas=get_distinct_values(db, "police_area"),
        designations=get_distinct_values(db, "designation"),
        allocations=get_distinct_values(db, "allocation"),
    )
