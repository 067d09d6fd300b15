"""Configuration settings loaded from .env file."""

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from .env file.

    The API key may also be saved in the local history store; an explicit
    value here (or ANTHROPIC_API_KEY in the environment) takes precedence.
    """

    # LLM
    anthropic_api_key: Optional[str] = None
    llm_model: str = "claude-sonnet-4-5"

    # Retry / refinement budgets
    max_retries: int = 3
    max_refinement_attempts: int = 2

    # Generation defaults
    default_character_count: int = 1500
    default_language: str = "pt-BR"

    # Target window: [max(window_floor, count - padding), count + padding]
    window_floor: int = 100
    window_padding: int = 500

    # Artifact limits
    description_max_chars: int = 250
    thumbnail_context_chars: int = 500

    # Storage
    history_db_path: Path = Path("./data/history.db")

    # Logging
    log_dir: Path = Path("./data/logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("max_retries", "max_refinement_attempts")
    @classmethod
    def validate_budgets(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Retry budgets must be >= 0")
        return v

    @field_validator("default_character_count")
    @classmethod
    def validate_character_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("default_character_count must be a positive integer")
        return v

    @field_validator("window_floor", "window_padding", "description_max_chars", "thumbnail_context_chars")
    @classmethod
    def validate_char_counts(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Character count must be non-negative")
        return v

    @field_validator("history_db_path", "log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
