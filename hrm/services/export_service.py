"""
Employee CSV export
"""
import logging
from pathlib import Path
from typing import Optional, Union

from sqlalchemy.orm import Session

from hrm.constants import ACTION_EXPORT, ENTITY_EMPLOYEE
from hrm.core.deps import requires
from hrm.core.errors import IOFailure
from hrm.core.permissions import Capability
from hrm.core.session import UserSession
from hrm.schemas.employee import EmployeeFilters
from hrm.services.audit_service import log_audit
from hrm.services.employee_service import list_employees
from hrm.utils.csv_export import write_csv

logger = logging.getLogger(__name__)

EMPLOYEE_CSV_COLUMNS = [
    ("EPF Number", "epf_number"),
    ("Name with Initials", "name_with_initials"),
    ("Full Name", "full_name"),
    ("Department", "department"),
    ("Cader", "cader"),
    ("Designation", "designation"),
    ("Allocation", "allocation"),
    ("Date of Joining", "date_of_join"),
    ("Working Status", "working_status"),
    ("Date of Birth", "dob"),
    ("Marital Status", "marital_status"),
    ("Mobile 1", "mobile_1"),
    ("Mobile 2", "mobile_2"),
    ("Transport Route", "transport_route"),
    ("Police Area", "police_area"),
    ("Address", "address"),
    ("Date of Resignation", "date_of_resign"),
]


@requires(Capability.EXPORT_DATA)
def export_employees_csv(
    db: Session,
    destination: Union[str, Path],
    filters: Optional[EmployeeFilters] = None,
    *,
    actor: Optional[UserSession] = None,
) -> int:
    """
    Write the employees matching filters to a CSV file

    Args:
        db: Database session
        destination: Target file path
        filters: Same filter object the employee list takes
        actor: Current session (needs can_export_data)

    Returns:
        Number of employee rows written
    """
    employees = list_employees(db, filters)
    try:
        count = write_csv(destination, EMPLOYEE_CSV_COLUMNS, (e.model_dump() for e in employees))
    except OSError as e:
        raise IOFailure(f"Failed to export employees: {e}") from e

    log_audit(
        db,
        actor=actor,
        action=ACTION_EXPORT,
        entity_type=ENTITY_EMPLOYEE,
        details=f"Exported {count} employees to CSV: {destination}",
    )
    logger.info(f"Exported {count} employees to {destination}")
    return count
