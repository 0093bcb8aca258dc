# salon_ai/settings.py
import os

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Salon AI")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # AI gateway (chat completions)
    AI_GATEWAY_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("AI_GATEWAY_API_KEY", "LOVABLE_API_KEY"),
    )
    AI_GATEWAY_URL: str = Field(default="https://ai.gateway.lovable.dev/v1/chat/completions")
    AI_MODEL: str = Field(default="google/gemini-2.5-flash")
    AI_TIMEOUT_SECONDS: float | None = None

    # Notion sync
    NOTION_API_KEY: str | None = None
    NOTION_DATABASE_ID: str | None = None
    NOTION_VERSION: str = Field(default="2022-06-28")

    # Estama shop pages (photos, schedule)
    ESTAMA_SHOP_URL: str = Field(default="https://estama.jp/shop/43923")

    # local storage for synced content
    DB_PATH: str = Field(default="data/salon.db")

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests swap it through app.dependency_overrides."""
    return settings
