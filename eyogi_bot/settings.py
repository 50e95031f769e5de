# eyogi_bot/settings.py
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="eYogi Bot")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # search
    SEARCH_LATENCY_SECONDS: float = Field(default=0.2, ge=0)
    MAX_SEARCH_RESULTS: int = Field(default=5, gt=0)

    # dialogue
    DID_YOU_KNOW_PROBABILITY: float = Field(default=0.3, ge=0, le=1)
    HISTORY_LIMIT: int = Field(default=10, gt=0)
    FACT_POOL_SIZE: int = Field(default=1000, ge=1000)
    MAX_SESSIONS: int = Field(default=500, gt=0)

    # catalog collaborator: "static" (yaml file / empty) or "rest" (hosted db)
    CATALOG_BACKEND: str = Field(default="static")
    CATALOG_DATA_PATH: str | None = None
    CATALOG_URL: str | None = None
    CATALOG_API_KEY: str | None = None
    CATALOG_TIMEOUT: float = Field(default=10.0, gt=0)

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
