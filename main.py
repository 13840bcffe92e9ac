# HRM records system entry point
# Bootstraps the data directory and database, then prints where everything lives

from hrm.api.router import invoke
from hrm.main import create_app

if __name__ == "__main__":
    ctx = create_app()
    info = invoke(ctx, "get_database_info")
    if info.error:
        print(f"Error: {info.detail}")
    else:
        print(f"Database: {info.data.path} ({info.data.size_formatted})")
        print(f"Employees: {info.data.employee_count}, users: {info.data.user_count}")
    ctx.close()
