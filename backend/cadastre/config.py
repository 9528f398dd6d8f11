"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    cadastre_env: str = "development"
    cadastre_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Defaults for requests that omit pipeline options
    default_tolerance_m: float = 0.5
    default_mask_resolution: int = 256
    default_mask_padding: float = 0.1

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
