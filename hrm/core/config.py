"""
Configuration management for the HRM desktop records system
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Storage locations
    DATA_DIR: Path = Field(
        default=Path.home() / ".hrm_system",
        description="Directory holding the database file and employee images",
    )
    DATABASE_FILENAME: str = Field(default="hrm_system.db", description="SQLite database file name")
    BACKUP_FILENAME: str = Field(
        default="hrm_system_backup.db",
        description="File the current database is copied to before an import",
    )
    IMAGES_DIRNAME: str = Field(default="employee_images", description="Sub-directory for employee photos")

    # Credential store
    PASSWORD_SALT: str = Field(default="hrm_salt_", description="Fixed salt mixed into password digests")

    # Initial admin bootstrap settings
    INITIAL_ADMIN_USERNAME: str = Field(default="admin", description="Username of the bootstrap admin")
    INITIAL_ADMIN_PASSWORD: str = Field(
        default=DEFAULT_ADMIN_PASSWORD,
        description="Password of the bootstrap admin (used only when the user table is empty)",
    )
    INITIAL_ADMIN_FULL_NAME: str = Field(default="System Administrator", description="Display name of the bootstrap admin")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # Audit log paging
    AUDIT_PAGE_SIZE: int = Field(default=50, ge=1, description="Default audit log page size")
    AUDIT_MAX_PAGE_SIZE: int = Field(default=500, ge=1, description="Upper bound for a requested page size")

    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @property
    def database_path(self) -> Path:
        return Path(self.DATA_DIR) / self.DATABASE_FILENAME

    @property
    def backup_path(self) -> Path:
        return Path(self.DATA_DIR) / self.BACKUP_FILENAME

    @property
    def images_dir(self) -> Path:
        return Path(self.DATA_DIR) / self.IMAGES_DIRNAME

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.database_path}"

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            if self.INITIAL_ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
                raise ValueError(
                    "INITIAL_ADMIN_PASSWORD must be changed from the default in production environment"
                )


# Create settings instance
settings = Settings()
