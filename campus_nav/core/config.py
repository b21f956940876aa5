# campus_nav/core/config.py
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Campus Navigation API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # JSON campus description; the bundled sample campus is used when unset.
    CAMPUS_DATA_FILE: Optional[Path] = None

    # Off-path distance (metres) that triggers a reroute.
    DEVIATION_THRESHOLD_M: float = 30.0
    # Distance (metres) from the destination at which a walk counts as arrived.
    ARRIVAL_TOLERANCE_M: float = 10.0
    # Sessions untouched for this long (seconds) are discarded; None keeps them.
    SESSION_IDLE_TTL_S: Optional[float] = 3600.0


settings = Settings()
