"""
Permission model: the eleven-capability permission set and role defaults
"""
import enum
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict

from hrm.constants import (
    ROLE_ADMIN,
    ROLE_HR_MANAGER,
    ROLE_HR_STAFF,
    ROLE_VIEWER,
)
from hrm.utils.enums import enum_value


class Capability(str, enum.Enum):
    """Named capabilities; each value is the matching PermissionSet field and users column"""
    VIEW_EMPLOYEES = "can_view_employees"
    ADD_EMPLOYEES = "can_add_employees"
    EDIT_EMPLOYEES = "can_edit_employees"
    DELETE_EMPLOYEES = "can_delete_employees"
    MANAGE_USERS = "can_manage_users"
    VIEW_ALL_DEPARTMENTS = "can_view_all_departments"
    EXPORT_DATA = "can_export_data"
    VIEW_REPORTS = "can_view_reports"
    MANAGE_SETTINGS = "can_manage_settings"
    BACKUP_DATABASE = "can_backup_database"
    VIEW_AUDIT_LOGS = "can_view_audit_logs"


CAPABILITY_FIELDS = [c.value for c in Capability]


class PermissionSet(BaseModel):
    """Immutable bundle of the eleven capability flags shared by users and sessions"""
    can_view_employees: bool = True
    can_add_employees: bool = False
    can_edit_employees: bool = False
    can_delete_employees: bool = False
    can_manage_users: bool = False
    can_view_all_departments: bool = False
    can_export_data: bool = False
    can_view_reports: bool = False
    can_manage_settings: bool = False
    can_backup_database: bool = False
    can_view_audit_logs: bool = False

    model_config = ConfigDict(frozen=True, from_attributes=True)

    def has(self, capability: Union[Capability, str]) -> bool:
        """Check a single capability"""
        return bool(getattr(self, Capability(capability).value))

    def granted(self) -> list:
        """Capabilities switched on, in declaration order"""
        return [c for c in Capability if self.has(c)]

    def as_columns(self) -> Dict[str, bool]:
        """Column name -> flag mapping for persisting onto a users row"""
        return {field: bool(getattr(self, field)) for field in CAPABILITY_FIELDS}

    @classmethod
    def of(cls, *capabilities: Capability) -> "PermissionSet":
        """Build a set granting exactly the given capabilities"""
        flags = {field: False for field in CAPABILITY_FIELDS}
        for capability in capabilities:
            flags[Capability(capability).value] = True
        return cls(**flags)

    @classmethod
    def admin(cls) -> "PermissionSet":
        return cls.of(*Capability)

    @classmethod
    def hr_manager(cls) -> "PermissionSet":
        return cls.of(
            Capability.VIEW_EMPLOYEES,
            Capability.ADD_EMPLOYEES,
            Capability.EDIT_EMPLOYEES,
            Capability.DELETE_EMPLOYEES,
            Capability.VIEW_ALL_DEPARTMENTS,
            Capability.EXPORT_DATA,
            Capability.VIEW_REPORTS,
        )

    @classmethod
    def hr_staff(cls) -> "PermissionSet":
        return cls.of(Capability.VIEW_EMPLOYEES, Capability.ADD_EMPLOYEES)

    @classmethod
    def viewer(cls) -> "PermissionSet":
        return cls.of(Capability.VIEW_EMPLOYEES)


_ROLE_DEFAULTS = {
    ROLE_ADMIN: PermissionSet.admin,
    ROLE_HR_MANAGER: PermissionSet.hr_manager,
    ROLE_HR_STAFF: PermissionSet.hr_staff,
    ROLE_VIEWER: PermissionSet.viewer,
}


def derive_permissions(role) -> PermissionSet:
    """
    Derive the default permission set for a role

    Unknown roles (including "custom") get the viewer set.
    """
    factory = _ROLE_DEFAULTS.get(enum_value(role), PermissionSet.viewer)
    return factory()
