"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STATE_BACKENDS = frozenset({"file", "supabase"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    remote_estimation: bool = False
    remote_coach: bool = False
    undo_window_seconds: float = 5.0
    timezone: str = "UTC"
    log_level: str = "INFO"
    state_backend: str = "file"
    state_file_path: str = ".calorie_snap/state.json"
    state_key: str = "caloriesnap_data_v2"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_state_table: str = "app_state"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_state_backend(raw: str | None) -> str:
    """Normalize the state backend name."""
    backend = (raw or "file").strip().lower()
    if backend not in STATE_BACKENDS:
        raise ValueError(f"Unknown state backend: {raw!r}")
    return backend
