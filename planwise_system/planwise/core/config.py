"""
Client configuration loader and it handles:
- Environment variables
- Analysis service address
- Draft storage configuration

And, the main purpose:
Central place for client configuration.
"""


from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Remote analysis service
    API_BASE_URL: str = "http://localhost:8080"
    HTTP_TIMEOUT_S: Optional[float] = None  # None -> httpx default

    # Draft persistence
    DATABASE_URL: str = "sqlite+aiosqlite:///./planwise.db"
    DRAFT_STORAGE_KEY: str = "plan"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
