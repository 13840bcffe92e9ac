"""
Audit log schemas
"""
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from hrm.utils.datetime_utils import format_timestamp


class AuditLogFilters(BaseModel):
    """Audit query: blank text filters are ignored; dates are inclusive"""
    username: Optional[str] = ""
    action: Optional[str] = ""
    entity_type: Optional[str] = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    limit: Optional[int] = Field(None, ge=1)
    offset: int = Field(0, ge=0)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AuditLogOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    username: str
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    details: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at")
    def _ser_created_at(self, dt: Optional[datetime]):
        return format_timestamp(dt)


class AuditLogResult(BaseModel):
    logs: List[AuditLogOut]
    total_count: int


class ActionCount(BaseModel):
    action: str
    count: int


class UserActivity(BaseModel):
    username: str
    count: int


class AuditLogSummary(BaseModel):
    total_logs: int
    today_logs: int
    week_logs: int
    action_breakdown: List[ActionCount]
    active_users: List[UserActivity]


class CreateAuditLogRequest(BaseModel):
    """Audit entry recorded on behalf of the client (views, report exports, ...)"""
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None
    details: Optional[str] = None
