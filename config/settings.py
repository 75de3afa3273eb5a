"""Configuration management using pydantic-settings."""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Cache cell settings loaded from environment variables."""

    # Default time window for policies built from settings.
    # Leave the amount unset to get entries that never expire.
    cache_default_expiry_amount: Optional[int] = None
    cache_default_expiry_unit: str = "second"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
