"""
User management schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from hrm.core.permissions import PermissionSet
from hrm.utils.datetime_utils import format_timestamp

MIN_USERNAME_LENGTH = 3


class CreateUserRequest(BaseModel):
    """Schema for creating a system user"""
    username: str = Field(..., description="Login name (unique)")
    password: str = Field(..., description="Initial password")
    full_name: str = Field(..., description="Display name")
    role: str = Field(..., description="admin, hr_manager, hr_staff, viewer or custom")
    department_access: Optional[str] = Field(None, description="NULL for all departments")
    permissions: Optional[PermissionSet] = Field(
        None, description="Explicit permissions; role defaults apply when omitted"
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < MIN_USERNAME_LENGTH:
            raise ValueError(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Full name is required")
        return v


class UpdateUserRequest(BaseModel):
    """Schema for a full update of a system user (password excluded)"""
    user_id: int
    full_name: str
    role: str
    department_access: Optional[str] = None
    is_active: bool = True
    permissions: Optional[PermissionSet] = None


class UserInfo(BaseModel):
    """User as shown to administrators; never carries the password digest"""
    id: int
    username: str
    full_name: str
    role: str
    department_access: Optional[str] = None
    is_active: bool
    permissions: PermissionSet
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "last_login")
    def _ser_datetime(self, dt: Optional[datetime]):
        return format_timestamp(dt)
