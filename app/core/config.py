from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    DATABASE_URL: str = "sqlite:///./complaints.db"
    SQL_ECHO: bool = False
    FRONTEND_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"
    # Receipt numbers
    RECEIPT_TIMEZONE: str = "UTC"
    RECEIPT_ALLOCATION_ATTEMPTS: int = 3

settings = Settings()
