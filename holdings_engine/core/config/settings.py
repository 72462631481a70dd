# holdings_engine/core/config/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    Includes general app settings and the numeric settings used by the lot engine.
    """
    # General App Settings
    APP_NAME: str = "Holdings Engine API"
    APP_VERSION: str = "0.1.0"
    DEBUG_MODE: bool = False

    # API Specific Settings
    API_V1_STR: str = "/api/v1"

    # Logging Settings
    LOG_LEVEL: str = "INFO" # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Lot Accounting Settings
    DECIMAL_PRECISION: int = 28 # Significant digits of the active Decimal context
    DEFAULT_CURRENCY: str = "INR"

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent.parent / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=False, # Allows env vars like APP_NAME or app_name
        extra='ignore'
    )

settings = Settings()
