"""Reaction CSV bot configuration."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-driven settings (DISCORD_* variables or .env)."""

    public_key: str = ""
    token: str = ""
    application_id: str = ""
    api_base: str = "https://discord.com/api/v10"

    # uvicorn runner
    host: str = "0.0.0.0"
    port: int = 8787
    log_level: str = "INFO"

    model_config = {"env_prefix": "DISCORD_", "env_file": ".env", "extra": "ignore"}


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the process-wide settings."""
    return settings
