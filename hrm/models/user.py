"""
System user model
"""
import enum

from sqlalchemy import Boolean, Column, DateTime, Integer, String, text

from hrm.constants import ROLE_ADMIN, ROLE_CUSTOM, ROLE_HR_MANAGER, ROLE_HR_STAFF, ROLE_VIEWER
from hrm.core.permissions import CAPABILITY_FIELDS, PermissionSet
from hrm.db.base import Base
from hrm.utils.datetime_utils import now_local


class Role(str, enum.Enum):
    ADMIN = ROLE_ADMIN
    HR_MANAGER = ROLE_HR_MANAGER
    HR_STAFF = ROLE_HR_STAFF
    VIEWER = ROLE_VIEWER
    CUSTOM = ROLE_CUSTOM


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_VIEWER, server_default=ROLE_VIEWER)
    department_access = Column(String, nullable=True)  # NULL = all departments
    is_active = Column(Boolean, default=True, server_default="1")

    can_view_employees = Column(Boolean, default=True, server_default="1")
    can_add_employees = Column(Boolean, default=False, server_default="0")
    can_edit_employees = Column(Boolean, default=False, server_default="0")
    can_delete_employees = Column(Boolean, default=False, server_default="0")
    can_manage_users = Column(Boolean, default=False, server_default="0")
    can_view_all_departments = Column(Boolean, default=False, server_default="0")
    can_export_data = Column(Boolean, default=False, server_default="0")
    can_view_reports = Column(Boolean, default=False, server_default="0")
    can_manage_settings = Column(Boolean, default=False, server_default="0")
    can_backup_database = Column(Boolean, default=False, server_default="0")
    can_view_audit_logs = Column(Boolean, default=False, server_default="0")

    created_at = Column(DateTime, default=now_local, server_default=text("CURRENT_TIMESTAMP"))
    last_login = Column(DateTime, nullable=True)

    @property
    def permissions(self) -> PermissionSet:
        return PermissionSet(**{field: bool(getattr(self, field)) for field in CAPABILITY_FIELDS})

    def apply_permissions(self, permissions: PermissionSet) -> None:
        for column, flag in permissions.as_columns().items():
            setattr(self, column, flag)

    def __repr__(self):
        return f"<User {self.id} {self.username!r} role={self.role}>"
