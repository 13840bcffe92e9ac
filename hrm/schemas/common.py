"""
Shared response schemas
"""
from typing import Any, Optional

from pydantic import BaseModel


class CommandResponse(BaseModel):
    """Envelope every boundary command returns: data on success, a message on failure"""
    error: bool = False
    detail: Optional[str] = None
    data: Any = None

    @classmethod
    def success(cls, data: Any = None) -> "CommandResponse":
        return cls(error=False, data=data)

    @classmethod
    def failure(cls, detail: str) -> "CommandResponse":
        return cls(error=True, detail=detail)


class CategoryCount(BaseModel):
    """A group label and its row count"""
    name: str
    count: int
