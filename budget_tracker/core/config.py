from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "BudgetTracker"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")
    LOG_LEVEL: str = Field(default="INFO")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./budget_tracker.db")

    # JWT session
    JWT_SECRET_KEY: str = Field(default="change-me-in-production", validation_alias="JWT_SECRET")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    SESSION_COOKIE_NAME: str = "budget_session"
    SESSION_COOKIE_SECURE: bool = False

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Budget rules
    MONTHLY_BUDGET: float = 500.0
    BUDGET_WARNING_PERCENT: float = 80.0

    # Weekly budget job, Sunday 09:00 by default
    SCHEDULER_ENABLED: bool = True
    SCHEDULER_DAY_OF_WEEK: str = "sun"
    SCHEDULER_HOUR: int = 9
    SCHEDULER_MINUTE: int = 0

    DIGEST_DEFAULT_LIMIT: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, populate_by_name=True)


settings = Settings()
