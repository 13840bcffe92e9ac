"""
Database maintenance schemas
"""
from pydantic import BaseModel


class DatabaseInfo(BaseModel):
    path: str
    size_bytes: int
    size_formatted: str
    employee_count: int
    user_count: int
