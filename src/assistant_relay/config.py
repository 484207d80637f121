"""Configuration module for assistant-relay using pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """Main configuration settings for assistant-relay.

    All settings can be overridden via environment variables with the RELAY_ prefix.
    For example, RELAY_POLL_INTERVAL=0.5 will override the poll_interval setting.
    The OpenAI API key itself is read by the openai SDK from OPENAI_API_KEY.
    """

    # Allow-list
    allowlist_path: str = "allowed_assistants.json"

    # OpenAI
    openai_base_url: str | None = None
    request_timeout: float = Field(default=60.0, gt=0)
    attachment_tool: Literal["code_interpreter", "file_search"] = "code_interpreter"

    # Run polling
    poll_interval: float = Field(default=1.0, ge=0)
    poll_max_attempts: int | None = Field(default=None, ge=1)
    poll_backoff: float = Field(default=1.0, ge=1.0)
    poll_max_interval: float | None = Field(default=None, gt=0)

    # Console commands
    exit_command: str = "exit"
    new_command: str = "new"
    selection_max_attempts: int | None = Field(default=None, ge=1)

    # Session behaviour
    verify_shared_resources: bool = False
    cancel_runs_on_interrupt: bool = True
    delete_threads_on_end: bool = False

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="RELAY_")

    @property
    def resolved_allowlist_path(self) -> Path:
        """Get the allow-list path with the user directory expanded."""
        return Path(self.allowlist_path).expanduser()
