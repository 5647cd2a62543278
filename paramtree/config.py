from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PARAMTREE_", env_file=".env", extra="ignore")

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Compiler
    MAX_NESTING_DEPTH: int = Field(default=32, ge=1)

    # Coercion
    STRICT_BOOLEANS: bool = False  # Only "true"/"false" accepted by the Boolean type


@lru_cache
def get_settings() -> Settings:
    return Settings()
