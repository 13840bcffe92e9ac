"""
Database models
"""
from hrm.models.employee import Employee
from hrm.models.user import Role, User
from hrm.models.audit_log import AuditLog

__all__ = [
    "Employee",
    "User",
    "Role",
    "AuditLog",
]
