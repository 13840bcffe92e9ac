"""
Session holder: the single "currently logged in" slot
"""
import threading
from typing import Optional

from pydantic import BaseModel, ConfigDict

from hrm.core.permissions import Capability, PermissionSet


class UserSession(BaseModel):
    """Operator identity plus the permission set captured at login time"""
    user_id: int
    username: str
    full_name: str
    role: str
    department_access: Optional[str] = None
    permissions: PermissionSet

    model_config = ConfigDict(frozen=True)

    def can(self, capability: Capability) -> bool:
        return self.permissions.has(capability)


class SessionHolder:
    """
    Process-lifetime single-slot session store

    The lock is held only while reading or swapping the slot. get() hands
    back a copy so callers never share the stored object.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._current: Optional[UserSession] = None

    def set(self, session: UserSession) -> None:
        with self._lock:
            self._current = session

    def clear(self) -> Optional[UserSession]:
        """Clear the slot and return whatever session was stored"""
        with self._lock:
            previous, self._current = self._current, None
        return previous

    def get(self) -> Optional[UserSession]:
        with self._lock:
            current = self._current
        return current.model_copy(deep=True) if current is not None else None

    @property
    def is_authenticated(self) -> bool:
        with self._lock:
            return self._current is not None
