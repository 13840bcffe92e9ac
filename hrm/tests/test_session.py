"""
Tests for the session holder
"""
import threading

from hrm.core.permissions import PermissionSet
from hrm.core.session import SessionHolder, UserSession


def _session(user_id=1, username="admin"):
    return UserSession(
        user_id=user_id,
        username=username,
        full_name="System Administrator",
        role="admin",
        permissions=PermissionSet.admin(),
    )


def test_empty_holder():
    holder = SessionHolder()
    assert holder.get() is None
    assert holder.is_authenticated is False
    assert holder.clear() is None


def test_set_get_clear():
    holder = SessionHolder()
    holder.set(_session())
    assert holder.is_authenticated is True
    assert holder.get().username == "admin"

    previous = holder.clear()
    assert previous.username == "admin"
    assert holder.get() is None


def test_get_returns_a_copy():
    holder = SessionHolder()
    stored = _session()
    holder.set(stored)
    copy = holder.get()
    assert copy == stored
    assert copy is not stored


def test_login_replaces_previous_session():
    holder = SessionHolder()
    holder.set(_session(1, "first"))
    holder.set(_session(2, "second"))
    assert holder.get().user_id == 2


def test_concurrent_set_and_get():
    holder = SessionHolder()
    seen = []

    def writer(i):
        holder.set(_session(i, f"user{i}"))

    def reader():
        current = holder.get()
        if current is not None:
            seen.append(current.username)

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(20)]
    threads += [threading.Thread(target=reader) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert holder.get().username.startswith("user")
    assert all(name.startswith("user") for name in seen)
