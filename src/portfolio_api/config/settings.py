# src/portfolio_api/config/settings.py
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from portfolio_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="portfolio-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    port: int = Field(default=5000, alias="PORT", description="Port uvicorn listens on")
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API"
    )

    # Document store
    mongo_uri: Optional[str] = Field(
        default=None,
        alias="MONGO_URI",
        description="MongoDB connection string; SQLite documents are used when unset"
    )
    mongo_db_name: str = Field(
        default="portfolio",
        description="Database used when the MongoDB URI does not name one"
    )
    db_path: str = Field(
        default="portfolio.db",
        description="SQLite document file for local development"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="portfolio-media",
        description="S3 bucket for uploaded images"
    )

    media_base_url: Optional[str] = Field(
        default=None,
        description="Public URL prefix for uploaded images, e.g. a CDN in front of the bucket"
    )

    upload_folder_root: str = Field(
        default="portfolio",
        description="Top-level folder every upload is filed under"
    )

    # Local storage configuration
    storage_dir: str = Field(
        default="storage",
        description="Local storage directory"
    )

    public_base_url: str = Field(
        default="http://localhost:5000",
        description="Externally reachable base URL of this API, used for locally stored media"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local": "local-dev",
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @property
    def uses_s3(self) -> bool:
        """Uploads go to S3 outside local development."""
        return self.deployment_mode in ["aws-mock", "aws-prod"]

    @property
    def uses_mongo(self) -> bool:
        return bool(self.mongo_uri)

    def get_environment_dict(self) -> Dict[str, str]:
        """Get configuration as a dictionary with secrets masked, for display."""
        def mask(value: Optional[str]) -> str:
            return "****" if value else ""

        return {
            'DEPLOYMENT_MODE': self.deployment_mode,
            'LOG_LEVEL': self.log_level,
            'HOST': self.host,
            'PORT': str(self.port),
            'MONGO_URI': mask(self.mongo_uri),
            'MONGO_DB_NAME': self.mongo_db_name,
            'DB_PATH': self.db_path,
            'S3_BUCKET_NAME': self.s3_bucket_name,
            'AWS_DEFAULT_REGION': self.aws_region,
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'AWS_ACCESS_KEY_ID': mask(self.aws_access_key_id),
            'AWS_SECRET_ACCESS_KEY': mask(self.aws_secret_access_key),
            'MEDIA_BASE_URL': self.media_base_url or '',
            'STORAGE_DIR': self.storage_dir,
            'PUBLIC_BASE_URL': self.public_base_url,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
