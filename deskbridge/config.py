"""
Application configuration from environment variables.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # Overrides the per-platform application data directory
    deskbridge_data_dir: Optional[str] = None
    # Upstream request timeout in seconds, shared by every proxied call
    deskbridge_request_timeout: float = 30.0
    # How long a caller waits for the base URL guard before giving up
    deskbridge_lock_timeout: float = 5.0
    deskbridge_host: str = "127.0.0.1"
    deskbridge_port: int = 8765
    deskbridge_log_level: str = "DEBUG"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()
