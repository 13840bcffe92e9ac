"""
Employee model
"""
from sqlalchemy import Column, DateTime, String, Text, text

from hrm.constants import STATUS_ACTIVE
from hrm.db.base import Base
from hrm.utils.datetime_utils import now_local


class Employee(Base):
    __tablename__ = "employees"

    epf_number = Column(String, primary_key=True)
    name_with_initials = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    dob = Column(String, nullable=True)
    police_area = Column(String, nullable=True)
    transport_route = Column(String, nullable=True)
    mobile_1 = Column(String, nullable=True)
    mobile_2 = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    date_of_join = Column(String, nullable=True)
    date_of_resign = Column(String, nullable=True)
    working_status = Column(String, default=STATUS_ACTIVE, server_default=STATUS_ACTIVE)
    marital_status = Column(String, nullable=True)
    cader = Column(String, nullable=True)
    designation = Column(String, nullable=True)
    allocation = Column(String, nullable=True)
    department = Column(String, nullable=True)
    image_path = Column(String, nullable=True)
    # Assigned on insert, never written by updates
    created_at = Column(DateTime, default=now_local, server_default=text("CURRENT_TIMESTAMP"))

    def __repr__(self):
        return f"<Employee {self.epf_number} {self.name_with_initials!r}>"
