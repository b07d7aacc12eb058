# zeromarket/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # General
    ENV: str = "dev"
    APP_NAME: str = "ZeroMarket Registry"
    REGISTRY_ID: str = "zeromarket/1.0"

    # Storage / DB
    DB_URL: str = "sqlite:///./data/zeromarket.db"
    STORAGE_BACKEND: str = "local"
    BLOB_ROOT: str = "./data/blobs"
    S3_BUCKET: str = ""
    S3_ENDPOINT_URL: str = ""      # set for R2 or other S3-compatible stores
    AWS_REGION: str = "auto"
    PUBLIC_BLOB_BASE_URL: str = "http://localhost:8000/blobs"

    # Serve catalog data when the database cannot be reached
    FALLBACK_ON_STORE_ERROR: bool = True

    # Auth
    JWT_SECRET: str = "dev-secret-please-change"
    JWT_ISSUER: str = "zeromarket"
    JWT_AUDIENCE: str = "zeromarket-users"
    JWT_EXPIRE_HOURS: int = 24 * 7

    # Identity provider
    GITHUB_API_URL: str = "https://api.github.com"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

_settings: Settings | None = None

def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
