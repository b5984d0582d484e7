"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Assistant
    ASSISTANT_CONFIG_PATH: str = ""
    DEFAULT_SEVERITY: str = "warn"

    # Upper bound on nodes accepted by the lint endpoint
    MAX_LAYERS: int = 50_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
