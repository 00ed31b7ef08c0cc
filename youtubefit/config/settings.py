import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    # Use absolute path for SQLite
    db_path = PROJECT_ROOT / "youtubefit.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.info(f"Using default database path: {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")
    log_diagnose: bool = Field(default=False, validation_alias="LOG_DIAGNOSE")
    host: str = Field(default="localhost", validation_alias="HOST")  # Use 0.0.0.0 for network access
    port: int = Field(default=3001, validation_alias="PORT")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")  # Comma-separated list
    workouts_csv_path: str = Field(
        default=str(PROJECT_ROOT / "workouts.csv"),
        validation_alias="WORKOUTS_CSV_PATH",
    )
    history_csv_path: str = Field(
        default=str(PROJECT_ROOT / "history.csv"),
        validation_alias="HISTORY_CSV_PATH",
    )
    yoga_channel_aliases: str = Field(
        default="adriene,nancy",
        validation_alias="YOGA_CHANNEL_ALIASES",
        description="Comma-separated channel name fragments treated as yoga instructors",
    )
    yoga_keyword_fallback: bool = Field(
        default=True,
        validation_alias="YOGA_KEYWORD_FALLBACK",
        description="Also match yoga by title/channel keywords when recommending in yoga mode",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, value: str) -> str:
        if not value.startswith("sqlite"):
            logger.warning(f"DATABASE_URL is not SQLite ({value}). Only SQLite is tested.")
        return value

    @property
    def yoga_aliases(self) -> list[str]:
        return [alias.strip().lower() for alias in self.yoga_channel_aliases.split(",") if alias.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
