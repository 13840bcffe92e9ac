"""
HRM records system - application context and bootstrap
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from hrm.core.config import Settings, settings as default_settings
from hrm.core.logging import setup_logging
from hrm.core.session import SessionHolder
from hrm.db.init_db import init_db
from hrm.db.session import Database

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a boundary command needs: settings, the database handle and the session slot"""
    settings: Settings
    database: Database
    sessions: SessionHolder = field(default_factory=SessionHolder)

    def close(self) -> None:
        self.sessions.clear()
        self.database.dispose()


def create_app(config: Optional[Settings] = None) -> AppContext:
    """
    Bootstrap the application

    Sets up logging, creates the data and image directories, opens the
    database, applies schema migrations and makes sure an admin user exists.

    Args:
        config: Settings to use (defaults to the environment-loaded settings)

    Returns:
        Ready-to-use AppContext
    """
    config = config or default_settings
    setup_logging(config)
    config.validate_production()

    config.DATA_DIR.mkdir(parents=True, exist_ok=True)
    config.images_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Data directory: {config.DATA_DIR}")
    logger.info(f"Database: {config.database_url}")

    database = Database(config.database_path)
    init_db(database, config)

    return AppContext(settings=config, database=database)
