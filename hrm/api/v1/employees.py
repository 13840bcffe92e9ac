"""
Employee record commands
"""
from typing import List

from hrm.api.commands import CommandRouter
from hrm.schemas.employee import DashboardStats, EmployeeFilters, EmployeeIn, EmployeeOut, FilterOptions
from hrm.services import employee_service, export_service, report_service

router = CommandRouter()


def _filters(filters) -> EmployeeFilters:
    return EmployeeFilters.model_validate(filters or {})


@router.command("get_employees")
def get_employees_command(ctx, filters=None) -> List[EmployeeOut]:
    """List employees; blank filter fields are ignored"""
    with ctx.database.session_scope() as db:
        return employee_service.list_employees(db, _filters(filters))


@router.command("get_employee_by_epf")
def get_employee_by_epf_command(ctx, epf_number: str) -> EmployeeOut:
    with ctx.database.session_scope() as db:
        return employee_service.get_employee(db, epf_number)


@router.command("create_employee")
def create_employee_command(ctx, employee) -> EmployeeOut:
    """Create an employee (needs can_add_employees)"""
    data = EmployeeIn.model_validate(employee)
    with ctx.database.session_scope() as db:
        return employee_service.create_employee(db, data, actor=ctx.sessions.get())


@router.command("update_employee")
def update_employee_command(ctx, employee) -> int:
    """Full-row update (needs can_edit_employees)"""
    data = EmployeeIn.model_validate(employee)
    with ctx.database.session_scope() as db:
        return employee_service.update_employee(db, data, actor=ctx.sessions.get())


@router.command("delete_employee")
def delete_employee_command(ctx, epf_number: str) -> bool:
    with ctx.database.session_scope() as db:
        return employee_service.delete_employee(db, epf_number, actor=ctx.sessions.get())


def _distinct(ctx, field: str) -> List[str]:
    with ctx.database.session_scope() as db:
        return employee_service.get_distinct_values(db, field)


@router.command("get_distinct_departments")
def get_distinct_departments_command(ctx) -> List[str]:
    return _distinct(ctx, "department")


@router.command("get_distinct_transport_routes")
def get_distinct_transport_routes_command(ctx) -> List[str]:
    return _distinct(ctx, "transport_route")


@router.command("get_distinct_police_areas")
def get_distinct_police_areas_command(ctx) -> List[str]:
    return _distinct(ctx, "police_area")


@router.command("get_distinct_designations")
def get_distinct_designations_command(ctx) -> List[str]:
    return _distinct(ctx, "designation")


@router.command("get_distinct_allocations")
def get_distinct_allocations_command(ctx) -> List[str]:
    return _distinct(ctx, "allocation")


@router.command("get_filter_options")
def get_filter_options_command(ctx) -> FilterOptions:
    with ctx.database.session_scope() as db:
        return employee_service.get_filter_options(db)


@router.command("get_dashboard_stats")
def get_dashboard_stats_command(ctx) -> DashboardStats:
    with ctx.database.session_scope() as db:
        return report_service.get_dashboard_stats(db)


@router.command("export_employees_csv")
def export_employees_csv_command(ctx, destination_path: str, filters=None) -> int:
    """Write matching employees to a CSV file (needs can_export_data); returns the row count"""
    with ctx.database.session_scope() as db:
        return export_service.export_employees_csv(
            db, destination_path, _filters(filters), actor=ctx.sessions.get()
        )
