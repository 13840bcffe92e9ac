"""
Database file maintenance commands
"""
from hrm.api.commands import CommandRouter
from hrm.schemas.database import DatabaseInfo
from hrm.services import database_service

router = CommandRouter()


@router.command("export_database")
def export_database_command(ctx, destination_path: str) -> str:
    """Copy the database file (needs can_backup_database)"""
    return database_service.export_database(
        ctx.database, destination_path, actor=ctx.sessions.get()
    )


@router.command("import_database")
def import_database_command(ctx, source_path: str) -> str:
    """Replace the database with a validated file, keeping a backup (needs can_backup_database)"""
    return database_service.import_database(
        ctx.database, source_path, ctx.settings.backup_path, actor=ctx.sessions.get()
    )


@router.command("get_database_info")
def get_database_info_command(ctx) -> DatabaseInfo:
    return database_service.get_database_info(ctx.database)
