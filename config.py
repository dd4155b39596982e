"""
Configuration settings for the APM application directory
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Data settings
    APM_DATA_FILE: Path = Path("data/applications.json")
    APM_MIRROR_PATH: Optional[Path] = None  # DuckDB file; unset keeps everything in memory

    # Search settings
    SEARCH_THRESHOLD: float = 0.3
    SEARCH_MODE: str = "fuzzy"
    NAME_WEIGHT: float = 1.0
    CODE_WEIGHT: float = 1.0
    DESCRIPTION_WEIGHT: float = 0.9

    # Paging settings
    DEFAULT_PAGE_SIZE: int = 20
    TABLE_PAGE_SIZE: int = 10

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "keyvalue"  # or "json"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from environment


# Global settings instance
settings = Settings()
