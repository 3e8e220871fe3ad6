"""Configuration management for termsquire.

Handles data location, table naming and logging settings using Pydantic Settings.
Supports environment variables and .env files.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads configuration from environment variables or .env file.
    All settings can be overridden via environment variables with TERMSQUIRE_ prefix.

    Example .env file:
        TERMSQUIRE_DATA_DIR=/data/term-squire-data
        TERMSQUIRE_TABLE_NAME=terms
        TERMSQUIRE_LOG_LEVEL=debug

    Example usage:
        >>> settings = Settings()
        >>> print(settings.db_path)
        /data/term-squire-data/term-squire.sqlite
    """

    # Storage
    data_dir: Path = Field(
        default=Path("/data/term-squire-data"),
        description="Directory holding the database and import artifacts",
        json_schema_extra={"env": "TERMSQUIRE_DATA_DIR"},
    )

    db_name: str = Field(
        default="term-squire",
        description="Database file name without the .sqlite suffix",
        min_length=1,
        json_schema_extra={"env": "TERMSQUIRE_DB_NAME"},
    )

    table_name: str = Field(
        default="terms",
        description="Name of the term table",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        json_schema_extra={"env": "TERMSQUIRE_TABLE_NAME"},
    )

    busy_timeout: float = Field(
        default=5.0,
        description="Seconds to wait for a locked database",
        gt=0,
        json_schema_extra={"env": "TERMSQUIRE_BUSY_TIMEOUT"},
    )

    # Import
    write_debug_json: bool = Field(
        default=True,
        description="Write the parsed dictionary as JSON next to the database",
        json_schema_extra={"env": "TERMSQUIRE_WRITE_DEBUG_JSON"},
    )

    debug_json_name: str = Field(
        default="processed_dictionary.json",
        description="File name of the parsed dictionary JSON",
        json_schema_extra={"env": "TERMSQUIRE_DEBUG_JSON_NAME"},
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (ERROR, WARN, INFO, DEBUG, TRACE)",
        json_schema_extra={"env": "TERMSQUIRE_LOG_LEVEL"},
    )

    # Model configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TERMSQUIRE_",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def db_path(self) -> Path:
        return self.data_dir / f"{self.db_name}.sqlite"

    @property
    def debug_json_path(self) -> Path | None:
        if not self.write_debug_json:
            return None
        return self.data_dir / self.debug_json_name

    def validate_data_dir(self) -> Path:
        """Check that the data directory exists.

        Returns:
            The data directory

        Raises:
            ValueError: If the path is missing or not a directory
        """
        if not self.data_dir.exists():
            raise ValueError(f"Directory '{self.data_dir}' does not exist")
        if not self.data_dir.is_dir():
            raise ValueError(f"'{self.data_dir}' is not a directory")
        return self.data_dir


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
