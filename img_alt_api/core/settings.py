"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables first, then an optional .env file.
- Frozen after construction; built once per app and handed to the services.
"""

from __future__ import annotations
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPLOAD_LIMIT = 10 * 1024 * 1024  # 10 MiB

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # unrelated env vars are fine
        frozen=True,
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for Uvicorn")
    port: int = Field(default=8000, description="Port for Uvicorn")
    log_level: str = Field(default="INFO")

    # ---- Vision provider ----
    # DEEPSEEK_API_KEY / DEEPSEEK_MODEL / DEEPSEEK_API_BASE
    deepseek_api_key: str = Field(..., min_length=1, description="Bearer credential for the vision provider")
    deepseek_model: str = Field(default="deepseek-vision", description="Provider model name")
    deepseek_api_base: str = Field(default="https://api.deepseek.com/v1")

    # ---- Uploads ----
    upload_limit: int = Field(default=DEFAULT_UPLOAD_LIMIT, gt=0, description="Max accepted upload size in bytes")

    @property
    def completions_url(self) -> str:
        return self.deepseek_api_base.rstrip("/") + "/chat/completions"

@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read once.
    """
    return Settings()
