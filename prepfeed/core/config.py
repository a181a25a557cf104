from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import os
import secrets

class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "PrepFeed Current Affairs"
    API_V1_STR: str = "/api/v1"
    FRONTEND_URL: str = Field(
        "http://localhost:5173",
        description="Frontend application URL"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        "sqlite:///./prepfeed.db",
        description="SQLAlchemy database URL"
    )
    DB_POOL_SIZE: int = 3
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Security
    SECRET_KEY: str = Field(
        default_factory=lambda: secrets.token_urlsafe(32),
        min_length=32
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = Field(
        False,
        description="Emit structured JSON log lines instead of plain text"
    )

    # API Configuration
    API_RATE_LIMIT: str = Field("30/minute", description="Limit for explicit recommendation generation")

    # Seeding
    SEED_ON_STARTUP: bool = Field(
        False,
        description="Load the sample current affairs fixtures when the store is empty"
    )

    # Recommendation scoring
    RECOMMENDATION_DEFAULT_LIMIT: int = Field(10, ge=1, le=100)
    RECOMMENDATION_BASE_SCORE: float = 0.8
    RECOMMENDATION_WEAK_SUBJECT_BONUS: float = 0.1
    RECOMMENDATION_STRONG_SUBJECT_PENALTY: float = 0.05
    RECOMMENDATION_HIGH_IMPORTANCE_BONUS: float = 0.05
    RECOMMENDATION_MEDIUM_IMPORTANCE_BONUS: float = 0.02
    RECOMMENDATION_AFFINITY_STEP: float = 0.01
    RECOMMENDATION_AFFINITY_CAP: float = 0.05

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: Optional[str]) -> str:
        # Heroku-style URLs are not accepted by SQLAlchemy 1.4+
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    model_config = SettingsConfigDict(
        # Set env_file only if it exists to avoid warnings
        env_file=".env" if os.path.isfile(".env") else None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        validate_assignment=True,
    )

settings = Settings()
