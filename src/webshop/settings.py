"""
webshop.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the HTTP host, storage and auth layers.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WEBSHOP_", case_sensitive=False)

    # dev/test create tables on startup; prod expects the schema to exist.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "webshop"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Persistence
    database_url: str = Field(default="sqlite+aiosqlite:///./webshop.db", repr=False)
    seed_users_file: Path | None = None

    # HTTP
    public_dir: Path = Path("public")
    body_read_timeout_s: float = Field(default=10.0, gt=0)

    # Auth
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
