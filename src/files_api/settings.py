# src/files_api/settings.py
import logging
from functools import lru_cache
from typing import Any, Optional

import pydantic
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from files_api.errors import ConfigurationMissing

logger = logging.getLogger(__name__)

S3_HOST_SUFFIX = "s3.amazonaws.com"


class Settings(BaseSettings):
    """
    Process-wide settings for the Files API.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    The region, credentials and bucket have no defaults. Build settings with
    `load_settings()` so a missing value aborts startup with `ConfigurationMissing`.
    """

    # AWS Core Settings
    aws_region: str = Field(
        validation_alias="AWS_REGION",
        min_length=1,
    )

    aws_access_key_id: str = Field(
        validation_alias="AWS_ACCESS_KEY_ID",
        min_length=1,
    )

    aws_secret_access_key: str = Field(
        validation_alias="AWS_SECRET_KEY",
        min_length=1,
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias="AWS_ENDPOINT_URL",
        description="Custom S3 endpoint, e.g. a local emulator",
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        validation_alias="AWS_BUCKET_NAME",
        min_length=1,
        description="S3 bucket holding uploaded files",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level",
    )

    @property
    def bucket_host(self) -> str:
        """Virtual-hosted style host name of the bucket."""
        return f"{self.s3_bucket_name}.{S3_HOST_SUFFIX}"

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


def load_settings(**overrides: Any) -> Settings:
    """
    Build and validate settings once.

    :param overrides: values keyed by env var name (e.g. `AWS_BUCKET_NAME`) that
        take precedence over the environment.
    :raises ConfigurationMissing: if any required setting is absent or empty.
    """
    try:
        return Settings(**overrides)
    except pydantic.ValidationError as err:
        missing = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in err.errors()
        }
        logger.error("Invalid configuration: %s", ", ".join(missing))
        raise ConfigurationMissing(
            f"Missing required settings: {', '.join(missing)}",
            details=missing,
        ) from err


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return load_settings()
