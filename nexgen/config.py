from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "NexGen Inventory"
    ENVIRONMENT: str = "local"

    # ==============================
    # Storage
    # ==============================
    # "memory://" keeps everything in process, any other value is a SQLAlchemy URL.
    STORE_URL: str = "sqlite:///./nexgen.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Security
    # ==============================
    PASSWORD_PBKDF2_ROUNDS: int = 200_000

    # ==============================
    # Orders
    # ==============================
    ORDER_DELETE_RESTOCK: bool = False

    # ==============================
    # Reports
    # ==============================
    REPORT_TIMEZONE: str = "UTC"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
