"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Production deployments MUST set the gate credential and JWT secret;
    the gate refuses to start without a password.

    Environment Variables:
        DATAROOM_USERNAME: Shared gate username
        DATAROOM_PASSWORD: Shared gate password (required)
        JWT_SECRET: Signing key for session tokens
        STORAGE_BACKEND: "s3" or "memory"
        S3_ENDPOINT_URL: S3-compatible endpoint (MinIO in dev, unset for AWS)
        S3_BUCKET_NAME: Bucket holding the documents
        S3_PUBLIC_BASE_URL: Base URL for public object links (optional)
        DATABASE_URL: Database for the inquiry log
        LOG_LEVEL: Logging level (default INFO)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Gate
    DATAROOM_USERNAME: str = "admin"
    DATAROOM_PASSWORD: Optional[SecretStr] = None

    # Session tokens
    JWT_SECRET: SecretStr = SecretStr("dev-secret-key-CHANGE-IN-PRODUCTION")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60

    # Object Storage (S3/MinIO)
    STORAGE_BACKEND: Literal["s3", "memory"] = "s3"
    S3_ENDPOINT_URL: Optional[str] = None
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[SecretStr] = None
    S3_BUCKET_NAME: str = "dataroom-documents"
    S3_REGION: str = "us-east-1"
    S3_PUBLIC_BASE_URL: Optional[str] = None

    # Documents
    CATALOG_PAGE_SIZE: int = 100
    MAX_UPLOAD_SIZE_BYTES: int = 100 * 1024 * 1024

    # Database (inquiry log)
    DATABASE_URL: str = "sqlite:///./dataroom.db"

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
