"""Process-wide settings for the storefront service."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from the environment (or a local ``.env`` file).

    ``MONGODB_URI`` has no default: the service refuses to start without it.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGODB_URI: str = Field(..., min_length=1)
    MONGODB_TIMEOUT_MS: int = Field(5000, gt=0)
    DATABASE_NAME: str = "afterClassClubs"
    PRODUCTS_COLLECTION: str = "Products"
    ORDERS_COLLECTION: str = "Orders"

    HOST: str = "0.0.0.0"
    PORT: int = Field(3000, gt=0, lt=65536)

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Reverse already-applied decrements when a multi-item reservation fails
    RESERVATION_COMPENSATE: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
