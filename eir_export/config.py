"""Runtime settings read from EIR_* environment variables and a local ``.env`` file."""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

DEFAULT_PREVIEW_CHARS = 200
DEFAULT_CONTEXT_ENTRY_LIMIT = 50


class Settings(BaseSettings):
    """Parser and view settings."""

    preview_chars: int = Field(default=DEFAULT_PREVIEW_CHARS, description="Characters of text shown with syntax errors")
    context_entry_limit: int = Field(default=DEFAULT_CONTEXT_ENTRY_LIMIT, description="Entries included in the assistant context")
    log_level: str = Field(default="WARNING", description="Logging level name")
    log_structured: bool = Field(default=False, description="Emit JSON log lines")

    model_config = {
        "env_prefix": "EIR_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("preview_chars", "context_entry_limit", mode="before")
    @classmethod
    def _positive_or_default(cls, value: Any, info: ValidationInfo) -> Any:
        # A bad override falls back to the default rather than stopping the CLI.
        default = cls.model_fields[info.field_name].default
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return number if number > 0 else default

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        """Build settings from the environment, optionally also reading ``.env``."""
        if load_dotenv_file:
            return cls()
        return cls(_env_file=None)
