"""
Report service - dashboard statistics over the employee table
"""
from datetime import date
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from hrm.constants import RECENT_WINDOW_DAYS, STATUS_ACTIVE, STATUS_RESIGN
from hrm.models.employee import Employee
from hrm.schemas.common import CategoryCount
from hrm.schemas.employee import DashboardStats
from hrm.utils.datetime_utils import days_ago

UNASSIGNED = "Unassigned"


def _active_breakdown(db: Session, column) -> List[CategoryCount]:
    """Active employees grouped by a column, NULL grouped as "Unassigned", largest group first"""
    label = func.coalesce(column, UNASSIGNED).label("name")
    count = func.count(Employee.epf_number).label("count")
    rows = (
        db.query(label, count)
        .filter(Employee.working_status == STATUS_ACTIVE)
        .group_by(label)
        .order_by(count.desc(), label.asc())
        .all()
    )
    return [CategoryCount(name=name, count=n) for name, n in rows]


def get_dashboard_stats(db: Session, today: Optional[date] = None) -> DashboardStats:
    """
    Headline counts and per-category breakdowns for the dashboard

    Args:
        db: Database session
        today: Reference date for the trailing 30-day windows (defaults to today)

    Returns:
        DashboardStats
    """
    since = days_ago(RECENT_WINDOW_DAYS, today).isoformat()

    def count(*criteria) -> int:
        return db.query(func.count(Employee.epf_number)).filter(*criteria).scalar() or 0

    return DashboardStats(
        total_employees=count(),
        active_employees=count(Employee.working_status == STATUS_ACTIVE),
        resigned_employees=count(Employee.working_status == STATUS_RESIGN),
        departments=_active_breakdown(db, Employee.department),
        caders=_active_breakdown(db, Employee.cader),
        allocations=_active_breakdown(db, Employee.allocation),
        # ISO date strings compare correctly as text
        recent_joinings=count(Employee.date_of_join.isnot(None), Employee.date_of_join >= since),
        recent_resignations=count(Employee.date_of_resign.isnot(None), Employee.date_of_resign >= since),
    )
