"""Helpers for values stored as plain strings but passed around as enums (roles, statuses)."""
from enum import Enum
from typing import Optional, Union


def enum_value(v: Union[Enum, str, None]) -> Optional[str]:
    """
    The stored string for an enum member; plain strings pass through stripped

    Examples:
        >>> enum_value(Role.HR_STAFF)
        'hr_staff'
        >>> enum_value(' viewer ')
        'viewer'
    """
    if v is None:
        return None
    if isinstance(v, Enum):
        return str(v.value)
    return str(v).strip()
