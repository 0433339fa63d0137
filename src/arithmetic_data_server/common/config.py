"""Runtime settings read from the environment."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server settings.

    Every field can be overridden with an ``ARITHMETIC_``-prefixed environment
    variable or a ``.env`` file (e.g. ``ARITHMETIC_PORT=9090``).
    """

    model_config = SettingsConfigDict(env_prefix="ARITHMETIC_", env_file=".env", extra="ignore")

    app_name: str = Field(default="Arithmetic Data Server", description="Name reported by /health")
    host: str = Field(default="127.0.0.1", description="HTTP bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP port")
    log_level: str = Field(default="INFO", description="Package logger level")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
