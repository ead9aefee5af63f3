"""Application configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Converter settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables (prefixed ``USXCSV_``)
    2. .env file
    3. Default values

    Command-line flags override these for a single run.
    """

    model_config = SettingsConfigDict(
        env_prefix="USXCSV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level used by the CLI when --quiet is not given",
    )

    # =========================================================================
    # Conversion
    # =========================================================================
    output_dir: Path | None = Field(
        default=None,
        description="Folder for CSV files; next to each input when unset",
    )
    csv_encoding: str = Field(
        default="utf-8",
        description="Encoding of written CSV files (e.g. 'utf-8-sig' for Excel)",
    )


settings = Settings()
