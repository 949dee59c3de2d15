"""Configuration settings for Tally Board."""

from typing import List, Optional
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = Field(default="ReCARE Tally", env="APP_NAME")
    product_name: str = Field(default="ReCARE_Tally", env="PRODUCT_NAME")
    debug: bool = Field(default=False, env="DEBUG")
    environment: str = Field(default="development", env="APP_ENV")

    # Database
    database_url: str = Field(
        default="sqlite:///./tallyboard.db", env="DATABASE_URL"
    )

    # Day buckets
    timezone: str = Field(default="America/Vancouver", env="TIMEZONE")
    builtin_tally_types: List[str] = Field(
        default=[
            "PRODUCT SERVICE REQUESTS",
            "IN-STORE REPAIRS",
            "DROP-OFFS",
            "AFTER-SALES CALLS",
            "DEFERRALS",
        ],
        env="BUILTIN_TALLY_TYPES",
    )
    midnight_check_interval: int = Field(default=60, env="MIDNIGHT_CHECK_INTERVAL")
    enable_midnight_watcher: bool = Field(default=True, env="ENABLE_MIDNIGHT_WATCHER")
    clear_confirmation_phrase: str = Field(
        default="confirm", env="CLEAR_CONFIRMATION_PHRASE"
    )

    # File paths
    export_path: Path = Field(default=Path("./exports"), env="EXPORT_PATH")

    # API
    cors_origins: List[str] = Field(
        default=[
            "http://localhost:5173",
            "http://localhost:3000",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ],
        env="CORS_ORIGINS",
    )

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_file: Optional[str] = Field(default="tallyboard.log", env="LOG_FILE")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Create global settings instance
settings = Settings()
