"""
Database maintenance service - file export, validated import, info
"""
import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from sqlalchemy import create_engine, func, inspect
from sqlalchemy.exc import DatabaseError
from sqlalchemy.pool import NullPool

from hrm.constants import ACTION_EXPORT, ACTION_IMPORT, ENTITY_DATABASE
from hrm.core.deps import requires
from hrm.core.errors import IOFailure, ValidationError
from hrm.core.permissions import Capability
from hrm.core.session import UserSession
from hrm.db.init_db import migrate
from hrm.db.session import Database
from hrm.models.employee import Employee
from hrm.models.user import User
from hrm.schemas.database import DatabaseInfo
from hrm.services.audit_service import log_audit

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("employees", "users")

KB = 1024
MB = KB * 1024
GB = MB * 1024


def format_file_size(size: int) -> str:
    """Human-readable size: bytes below 1 KB, otherwise KB/MB/GB with two decimals"""
    if size >= GB:
        return f"{size / GB:.2f} GB"
    if size >= MB:
        return f"{size / MB:.2f} MB"
    if size >= KB:
        return f"{size / KB:.2f} KB"
    return f"{size} bytes"


def _validate_source(source: Path) -> None:
    """
    Make sure a file is an SQLite database carrying the HRM tables

    Raises:
        IOFailure: File missing
        ValidationError: Not a database, or required tables absent
    """
    if not source.is_file():
        raise IOFailure("Source database file not found")

    engine = create_engine(f"sqlite:///{source}", poolclass=NullPool)
    try:
        tables = set(inspect(engine).get_table_names())
    except DatabaseError as e:
        raise ValidationError(f"Invalid database file: {e.orig}") from e
    finally:
        engine.dispose()

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    if missing:
        raise ValidationError(
            f"Invalid HRM database file: missing tables {', '.join(missing)}"
        )


@requires(Capability.BACKUP_DATABASE)
def export_database(
    database: Database,
    destination: Union[str, Path],
    *,
    actor: Optional[UserSession] = None,
) -> str:
    """
    Copy the database file verbatim to a destination path

    The connection lock is held for the whole copy.

    Returns:
        Success message naming the destination
    """
    destination = Path(destination)
    with database.exclusive() as db_path:
        if not db_path.is_file():
            raise IOFailure("Database file not found")
        try:
            shutil.copyfile(db_path, destination)
        except OSError as e:
            raise IOFailure(f"Failed to export database: {e}") from e

        with database.session_scope() as db:
            log_audit(
                db,
                actor=actor,
                action=ACTION_EXPORT,
                entity_type=ENTITY_DATABASE,
                details=f"Database exported to: {destination}",
            )

    logger.info(f"Database exported to {destination}")
    return f"Database exported successfully to: {destination}"


@requires(Capability.BACKUP_DATABASE)
def import_database(
    database: Database,
    source: Union[str, Path],
    backup_path: Union[str, Path],
    *,
    actor: Optional[UserSession] = None,
) -> str:
    """
    Replace the live database file with a validated copy of source

    The current file is first copied to backup_path. The connection lock is
    held from backup to reconnect, and the replaced file is brought up to the
    current schema before the lock is released, so the imported data is live
    as soon as this returns. A failure after the backup leaves the backup file
    as the recovery path.

    Returns:
        Success message naming the backup file

    Raises:
        IOFailure: Source missing or a copy failed
        ValidationError: Source is not an HRM database
    """
    source = Path(source)
    backup_path = Path(backup_path)
    _validate_source(source)

    with database.exclusive() as db_path:
        try:
            if db_path.is_file():
                shutil.copyfile(db_path, backup_path)
            shutil.copyfile(source, db_path)
        except OSError as e:
            raise IOFailure(f"Failed to import database: {e}") from e

        migrate(database)
        with database.session_scope() as db:
            log_audit(
                db,
                actor=actor,
                action=ACTION_IMPORT,
                entity_type=ENTITY_DATABASE,
                details=f"Database imported from: {source}",
            )

    logger.info(f"Database imported from {source}, previous file backed up to {backup_path}")
    return (
        "Database imported successfully. "
        f"Previous database backed up to: {backup_path}"
    )


def get_database_info(database: Database) -> DatabaseInfo:
    """File location and size plus employee and user row counts"""
    path = database.path
    size = path.stat().st_size if path.is_file() else 0

    with database.session_scope() as db:
        employee_count = db.query(func.count(Employee.epf_number)).scalar() or 0
        user_count = db.query(func.count(User.id)).scalar() or 0

    return DatabaseInfo(
        path=str(path),
        size_bytes=size,
        size_formatted=format_file_size(size),
        employee_count=employee_count,
        user_count=user_count,
    )
