"""Runtime configuration read from the environment (and an optional .env file)."""

from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.errors import ConfigurationError
from src.mclogs.client import DEFAULT_BASE_URL

load_dotenv()


class Settings(BaseSettings):
    """Bot configuration derived from environment variables."""

    discord_token: str = Field(..., alias="DISCORD_TOKEN")
    mclogs_base_url: str = Field(DEFAULT_BASE_URL, alias="MCLOGS_BASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("discord_token")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("DISCORD_TOKEN must not be empty.")
        return stripped


def load_settings() -> Settings:
    """Build Settings, turning validation problems into ConfigurationError."""
    try:
        return Settings()
    except ValidationError as exc:
        missing = ", ".join(
            str(err["loc"][0]) for err in exc.errors() if err.get("loc")
        )
        raise ConfigurationError(f"Invalid configuration ({missing}): {exc}") from exc
