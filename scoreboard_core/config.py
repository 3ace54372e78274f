"""Runtime settings, read from ``SCOREBOARD_*`` environment variables or ``.env``."""
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    # Minutes added to a solved problem for every rejected attempt before it.
    penalty_per_error: int = Field(20, ge=0)
    log_level: LogLevel = "WARNING"

    model_config = SettingsConfigDict(env_prefix="SCOREBOARD_", env_file=".env", extra="ignore")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
