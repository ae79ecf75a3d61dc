"""Runtime configuration for the show configuration tools."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShowConfigSettings(BaseSettings):
    """Environment-aware settings shared by the builder and the episode lister."""

    tmdb_api_base: str = Field(
        "https://api.themoviedb.org/3", description="Base URL for the TMDB v3 API."
    )
    request_timeout: float = Field(
        default=20.0, description="Timeout in seconds applied to every TMDB request."
    )

    model_config = SettingsConfigDict(
        env_prefix="SHOWCONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
