"""
Pytest configuration and fixtures
"""
import pytest

from hrm.api.router import invoke
from hrm.constants import ROLE_VIEWER
from hrm.core.config import Settings
from hrm.core.permissions import derive_permissions
from hrm.core.security import hash_password
from hrm.main import create_app
from hrm.models.user import User
from hrm.services.auth_service import session_for

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway data directory"""
    return Settings(DATA_DIR=tmp_path / "hrm_data", LOG_LEVEL="WARNING", APP_ENV="local")


@pytest.fixture
def ctx(settings):
    """Fully bootstrapped application context (tables, migrations, admin user)"""
    app_ctx = create_app(settings)
    yield app_ctx
    app_ctx.close()


@pytest.fixture
def db(ctx):
    """
    Session on the context's database, committed at teardown

    Do not call boundary commands while this session is in use: they share
    the single connection.
    """
    with ctx.database.session_scope() as session:
        yield session


@pytest.fixture
def admin_session(ctx):
    """Log the bootstrap admin in and return the stored session"""
    response = invoke(ctx, "login", username=ADMIN_USERNAME, password=ADMIN_PASSWORD)
    assert response.error is False, response.detail
    return response.data


@pytest.fixture
def user_factory():
    """Create a user row in the given session and return a session for it"""
    def _create(session, username, role=ROLE_VIEWER, permissions=None, password="secret123", is_active=True):
        user = User(
            username=username,
            password_hash=hash_password(password),
            full_name=username.replace("_", " ").title(),
            role=role,
            is_active=is_active,
        )
        user.apply_permissions(permissions or derive_permissions(role))
        session.add(user)
        session.flush()
        return session_for(user)
    return _create


@pytest.fixture
def employee_payload():
    """Build a full employee record dict; keyword arguments override fields"""
    def _payload(epf_number="E001", **overrides):
        data = {
            "epf_number": epf_number,
            "name_with_initials": "A. B. Perera",
            "full_name": "Amal Bandara Perera",
            "dob": "1990-04-12",
            "police_area": "Colombo",
            "transport_route": "Route 1",
            "mobile_1": "0771234567",
            "mobile_2": None,
            "address": "12 Main Street, Colombo",
            "date_of_join": "2020-01-15",
            "date_of_resign": None,
            "working_status": "active",
            "marital_status": "single",
            "cader": "Staff",
            "designation": "Clerk",
            "allocation": "Head Office",
            "department": "Finance",
            "image_path": None,
        }
        data.update(overrides)
        return data
    return _payload
