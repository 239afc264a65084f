"""Configuration settings for Newsline."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./newsline.db")
    DB_TIMEOUT_SECONDS: float = float(os.getenv("DB_TIMEOUT_SECONDS", "10"))

    # Access gate
    BEARER_TOKEN: str = os.getenv("BEARER_TOKEN", "")

    # Credential hashing cost per use case
    PASSWORD_BCRYPT_ROUNDS: int = int(os.getenv("PASSWORD_BCRYPT_ROUNDS", "12"))
    PROVISIONED_BCRYPT_ROUNDS: int = int(os.getenv("PROVISIONED_BCRYPT_ROUNDS", "4"))

    # Redis (delivery checkpoint)
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_PASSWORD: str | None = os.getenv("REDIS_PASSWORD") or None
    REDIS_SOCKET_TIMEOUT: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5"))
    REDIS_RETRY_ATTEMPTS: int = int(os.getenv("REDIS_RETRY_ATTEMPTS", "3"))
    CHECKPOINT_KEY: str = os.getenv("CHECKPOINT_KEY", "lastSentNewsId")

    # S3 (blob uploads)
    AWS_REGION: str = os.getenv("AWS_REGION", "ap-south-1")
    AWS_ACCESS_KEY_ID: str | None = os.getenv("AWS_ACCESS_KEY_ID") or None
    AWS_SECRET_ACCESS_KEY: str | None = os.getenv("AWS_SECRET_ACCESS_KEY") or None
    S3_BUCKET_NAME: str = os.getenv("S3_BUCKET_NAME", "")
    S3_KEY_PREFIX: str = os.getenv("S3_KEY_PREFIX", "banner-image-new")
    S3_CACHE_CONTROL: str = os.getenv("S3_CACHE_CONTROL", "public, max-age=31536000")
    S3_CONNECT_TIMEOUT: float = float(os.getenv("S3_CONNECT_TIMEOUT", "5"))
    S3_READ_TIMEOUT: float = float(os.getenv("S3_READ_TIMEOUT", "30"))

    # Upload
    MAX_UPLOAD_SIZE_MB: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10"))

    # CORS: comma-separated origins, "*" allows any
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if self.BEARER_TOKEN == "":
            errors.append("BEARER_TOKEN is not set - all protected endpoints will reject requests")
        if self.S3_BUCKET_NAME == "":
            errors.append("S3_BUCKET_NAME is not set - uploads will fail")
        if self.PROVISIONED_BCRYPT_ROUNDS < 4 or self.PASSWORD_BCRYPT_ROUNDS < 4:
            errors.append("bcrypt rounds below 4 are rejected by bcrypt")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
