"""
Employee schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from hrm.constants import STATUS_ACTIVE
from hrm.schemas.common import CategoryCount
from hrm.utils.datetime_utils import format_timestamp, iso_date


class EmployeeBase(BaseModel):
    """Employee fields shared by input and output schemas"""
    epf_number: str = Field(..., description="EPF number (unique, caller supplied)")
    name_with_initials: str = Field(..., description="Name with initials")
    full_name: str = Field(..., description="Full name")
    dob: Optional[str] = Field(None, description="Date of birth (YYYY-MM-DD)")
    police_area: Optional[str] = None
    transport_route: Optional[str] = None
    mobile_1: Optional[str] = None
    mobile_2: Optional[str] = None
    address: Optional[str] = None
    date_of_join: Optional[str] = Field(None, description="Date of joining (YYYY-MM-DD)")
    date_of_resign: Optional[str] = Field(None, description="Date of resignation (YYYY-MM-DD)")
    working_status: Optional[str] = Field(default=STATUS_ACTIVE, description="active, resign, ...")
    marital_status: Optional[str] = None
    cader: Optional[str] = None
    designation: Optional[str] = None
    allocation: Optional[str] = None
    department: Optional[str] = None
    image_path: Optional[str] = None


class EmployeeIn(EmployeeBase):
    """Full employee record as supplied by the caller (create and full-row update)"""

    model_config = ConfigDict(extra="ignore")

    @field_validator("epf_number", "name_with_initials", "full_name")
    @classmethod
    def require_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("dob", "date_of_join", "date_of_resign", mode="before")
    @classmethod
    def normalize_date(cls, v):
        return iso_date(v)

    @field_validator("working_status", mode="before")
    @classmethod
    def default_status(cls, v):
        if v is None or not str(v).strip():
            return STATUS_ACTIVE
        return str(v).strip()


class EmployeeOut(EmployeeBase):
    """Employee as read back from the database"""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at")
    def _ser_created_at(self, dt: Optional[datetime]):
        return format_timestamp(dt)


class EmployeeFilters(BaseModel):
    """
    List filter: blank fields are ignored, epf_number is a substring match,
    the rest are exact matches
    """
    epf_number: Optional[str] = ""
    department: Optional[str] = ""
    transport_route: Optional[str] = ""
    working_status: Optional[str] = ""


class FilterOptions(BaseModel):
    """Dropdown values for the employee list filters"""
    departments: List[str] = []
    transport_routes: List[str] = []
    police_areas: List[str] = []
    designations: List[str] = []
    allocations: List[str] = []


class DashboardStats(BaseModel):
    total_employees: int
    active_employees: int
    resigned_employees: int
    departments: List[CategoryCount]
    caders: List[CategoryCount]
    allocations: List[CategoryCount]
    recent_joinings: int
    recent_resignations: int
