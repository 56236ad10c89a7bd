from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Provider API keys ---
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    groq_api_key: str = ""

    # --- Default provider & model ---
    default_provider: str = "openai"  # openai | anthropic | groq
    default_model: Optional[str] = None
    default_temperature: float = 0.3

    # --- RAWG video game database ---
    rawg_api_key: str = ""
    rawg_base_url: str = "https://api.rawg.io/api"
    http_timeout_seconds: float = 10.0

    # --- Game rules ---
    max_questions: int = 20
    secret_source: str = "daily"  # daily | placeholder

    # --- Sessions ---
    session_cache_size: int = 1000
    session_ttl_hours: int = 24

    # --- Data paths ---
    prompts_dir: str = str(_PACKAGE_DIR / "prompts" / "templates")

    # --- Database ---
    database_url: str = f"sqlite+aiosqlite:///{_PROJECT_ROOT / 'gameguessr.db'}"


settings = Settings()
