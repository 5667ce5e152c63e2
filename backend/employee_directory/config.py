"""Application settings and configuration helpers."""
from functools import lru_cache
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    # Empty or missing selects the JSON file store.
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    data_file: str = Field(default="./data/employees.json", alias="DATA_FILE")
    seed_sample_data: bool = Field(default=True, alias="SEED_SAMPLE_DATA")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings(
        database_url=os.getenv("DATABASE_URL") or None,
        data_file=os.getenv("DATA_FILE", Settings.model_fields["data_file"].default),
        seed_sample_data=_env_flag("SEED_SAMPLE_DATA", Settings.model_fields["seed_sample_data"].default),
        log_level=os.getenv("LOG_LEVEL", Settings.model_fields["log_level"].default),
    )
