from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Serialization
    NORMALIZE_KEYS: bool = True  # Rewrite incoming camelCase/kebab-case keys to snake_case
    JSON_INDENT: int | None = None

    model_config = SettingsConfigDict(env_prefix="SCHEMAKIT_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
