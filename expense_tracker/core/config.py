from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "SmartExpenseTracker"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Local key-value store (income, expenses, preferences)
    STORAGE_PATH: str = Field(default="data/tracker.json")

    # Optional JSON file overriding the per-category ideal share of income
    IDEAL_PERCENTAGES_JSON: Optional[str] = Field(default=None)


settings = Settings()
