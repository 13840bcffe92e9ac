"""
Database initialization: tables, additive column migrations, bootstrap admin
"""
import logging
from typing import List, Optional

from alembic.migration import MigrationContext
from alembic.operations import Operations
import sqlalchemy as sa
from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session

from hrm.constants import ACTION_CREATE, ENTITY_SYSTEM, ROLE_ADMIN
from hrm.core.config import Settings
from hrm.core.permissions import CAPABILITY_FIELDS, PermissionSet
from hrm.core.security import hash_password
from hrm.db.base import Base
from hrm.db.session import Database
from hrm.models import AuditLog, Employee, User  # noqa: F401  (registers tables)
from hrm.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def _constant_server_default(column: sa.Column) -> Optional[str]:
    """SQLite's ALTER TABLE ADD COLUMN only accepts constant defaults"""
    default = column.server_default
    if default is not None and isinstance(getattr(default, "arg", None), str):
        return default.arg
    return None


def _add_missing_columns(conn: Connection) -> List[str]:
    """
    Add every model column missing from an existing table

    Returns:
        "table.column" for each column added
    """
    inspector = inspect(conn)
    existing_tables = set(inspector.get_table_names())
    op = Operations(MigrationContext.configure(conn))
    added = []

    for table in Base.metadata.sorted_tables:
        if table.name not in existing_tables:
            continue
        present = {col["name"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in present:
                continue
            op.add_column(
                table.name,
                sa.Column(
                    column.name,
                    column.type,
                    nullable=True,
                    server_default=_constant_server_default(column),
                ),
            )
            added.append(f"{table.name}.{column.name}")

    return added


def _backfill_admin_permissions(conn: Connection, added: List[str]) -> None:
    """Admins get every permission column that did not exist before this start"""
    new_flags = [c.split(".", 1)[1] for c in added if c.startswith("users.") and c.split(".", 1)[1] in CAPABILITY_FIELDS]
    if not new_flags:
        return
    assignments = ", ".join(f"{flag} = 1" for flag in new_flags)
    conn.execute(text(f"UPDATE users SET {assignments} WHERE role = :role"), {"role": ROLE_ADMIN})


def _migrate_legacy_job_role(conn: Connection) -> None:
    columns = {col["name"] for col in inspect(conn).get_columns("employees")}
    if "job_role" in columns:
        conn.execute(text(
            "UPDATE employees SET designation = job_role "
            "WHERE designation IS NULL AND job_role IS NOT NULL"
        ))


def migrate(database: Database) -> List[str]:
    """
    Create missing tables and apply additive-only migrations

    Columns are only ever added (with their defaults); nothing is dropped or
    renamed.
    """
    with database.begin() as conn:
        Base.metadata.create_all(bind=conn)
        added = _add_missing_columns(conn)
        _backfill_admin_permissions(conn, added)
        _migrate_legacy_job_role(conn)

    if added:
        logger.info(f"Added columns: {', '.join(added)}")
    return added


def ensure_admin_user(db: Session, config: Settings) -> Optional[User]:
    """
    Create the bootstrap admin when the users table is empty

    Returns:
        The created user, or None if any user already existed
    """
    if db.query(User).count() > 0:
        return None

    admin = User(
        username=config.INITIAL_ADMIN_USERNAME,
        password_hash=hash_password(config.INITIAL_ADMIN_PASSWORD),
        full_name=config.INITIAL_ADMIN_FULL_NAME,
        role=ROLE_ADMIN,
        is_active=True,
    )
    admin.apply_permissions(PermissionSet.admin())
    db.add(admin)
    db.flush()

    log_audit(
        db,
        actor=None,
        action=ACTION_CREATE,
        entity_type=ENTITY_SYSTEM,
        entity_id=str(admin.id),
        details=f"Created default admin user: {admin.username}",
    )
    logger.info(f"Created default admin user (username: {admin.username})")
    return admin


def init_db(database: Database, config: Settings) -> None:
    """Bring the database file to the current schema and guarantee an admin exists"""
    migrate(database)
    with database.session_scope() as db:
        ensure_admin_user(db, config)
