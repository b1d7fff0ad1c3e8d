# af_discounts/core/settings.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === Logging ===
    log_level: str = "INFO"
    log_json: bool = True  # False => ConsoleRenderer (lokaal debuggen)

    model_config = SettingsConfigDict(
        env_prefix="AF_DISCOUNTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
