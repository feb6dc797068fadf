import tempfile

from pydantic import field_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "TempSweep"
    LOG_LEVEL: str = "INFO"
    REDIS_URL: str = "redis://localhost:6379/0" # Default local Redis
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"

    # ─── Purge Task ──────────────────────────────────────────────────────
    # Directory to purge. Blank or unset means the platform temp directory.
    TEMP_DIR: str = ""
    PURGE_ENABLED: bool = True
    PURGE_SCHEDULE_HOUR: int = 3
    PURGE_SCHEDULE_MINUTE: int = 0

    @field_validator("TEMP_DIR", mode="after")
    @classmethod
    def _default_temp_dir(cls, value: str) -> str:
        return value.strip() or tempfile.gettempdir()

    @field_validator("PURGE_SCHEDULE_HOUR")
    @classmethod
    def _check_hour(cls, value: int) -> int:
        if not 0 <= value <= 23:
            raise ValueError("PURGE_SCHEDULE_HOUR must be between 0 and 23")
        return value

    @field_validator("PURGE_SCHEDULE_MINUTE")
    @classmethod
    def _check_minute(cls, value: int) -> int:
        if not 0 <= value <= 59:
            raise ValueError("PURGE_SCHEDULE_MINUTE must be between 0 and 59")
        return value

    class Config:
        env_file = ".env"
        validate_default = True

settings = Settings()
