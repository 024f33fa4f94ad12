from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    data_path: Path = Field(default=Path("data/mydays.json"), description="JSON store location")
    currency_symbol: str = "£"
    log_level: str = "WARNING"
    audit_log_path: Path = Path("data/report_audit.jsonl")

    model_config = SettingsConfigDict(env_prefix="MYDAYS_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
