from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HUMANAI_", env_file=".env", extra="ignore")

    # Application
    APP_NAME: str = "HumanAI trust study"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = Field(default="INFO")

    # Event log (newline-delimited JSON, append-only)
    EVENTS_FILE_PATH: Path = Field(default=Path("data") / "events.jsonl")

    # Identity cookies
    COOKIE_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 365
    COOKIE_SECURE: bool = False


config_settings = Settings()
