from typing import Any

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Extra Fields"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./extrafields.db"
    create_tables: bool = True

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = False

    # Lexicon language used for processor messages
    lexicon_language: str = "en"

    # Namespaced component options, read through Host.get_option()
    # e.g. {"extrafields_default_rank": 10}
    options: dict[str, Any] = {}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
