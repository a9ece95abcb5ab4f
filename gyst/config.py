"""Backend configuration for gyst.

The configuration is resolved once per invocation from, in order of
precedence: explicit overrides, environment variables (a repo-level .env is
loaded first), ~/.gyst/config.yaml and ~/.gyst/credentials, then defaults.
"""

import os
from enum import Enum
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gyst import global_config
from gyst.global_config import GlobalConfigError


class BackendMode(Enum):
    """Which backend shape generates messages."""

    RELAY = "relay"
    DIRECT = "direct"


# Defaults
DEFAULT_MODE = BackendMode.RELAY
DEFAULT_MODEL = "claude-3-5-haiku-20241022"
DEFAULT_RELAY_URL = "http://127.0.0.1:8080"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_DIFF_SIZE = 1000  # lines
DEFAULT_MAX_SUBJECT_LENGTH = 72
DEFAULT_RENAME_THRESHOLD = 50  # percent similarity

# Environment variables
API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"
MODE_ENV_VAR = "GYST_MODE"
RELAY_URL_ENV_VAR = "GYST_RELAY_URL"

AVAILABLE_MODELS = [
    "claude-3-5-haiku-20241022",
    "claude-3-5-sonnet-20241022",
    "claude-sonnet-4-20250514",
    "claude-opus-4-20250514",
]


class BackendConfig(BaseModel):
    """Read-only settings consumed by the generation pipeline."""

    model_config = ConfigDict(frozen=True)

    mode: BackendMode = DEFAULT_MODE
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_diff_size: int = Field(default=DEFAULT_MAX_DIFF_SIZE, gt=0)
    max_subject_length: int = Field(default=DEFAULT_MAX_SUBJECT_LENGTH, ge=20)
    relay_url: str = DEFAULT_RELAY_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    rename_threshold: int = Field(default=DEFAULT_RENAME_THRESHOLD, ge=0, le=100)
    editor: Optional[str] = None

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only key as not set."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("relay_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the relay base URL."""
        return v.rstrip("/")

    def masked_api_key(self) -> str:
        """Return the API key in a form safe to display."""
        if not self.api_key:
            return "<not set>"
        if len(self.api_key) > 12:
            return self.api_key[:8] + "..." + self.api_key[-4:]
        return "********"


def _file_settings(raw: dict) -> dict:
    """Flatten the nested config.yaml layout into BackendConfig fields."""
    ai = raw.get("ai") or {}
    git = raw.get("git") or {}
    commit = raw.get("commit") or {}
    server = raw.get("server") or {}

    settings = {
        "mode": ai.get("mode"),
        "model": ai.get("model"),
        "max_diff_size": git.get("max_diff_size"),
        "rename_threshold": git.get("rename_threshold"),
        "max_subject_length": commit.get("max_subject_length"),
        "relay_url": server.get("url"),
        "timeout": server.get("timeout"),
        "editor": raw.get("editor"),
    }
    return {k: v for k, v in settings.items() if v is not None}


def load_config(**overrides: Any) -> BackendConfig:
    """Resolve the backend configuration for this invocation.

    Args:
        **overrides: Field values that take precedence over everything else
            (e.g. a CLI ``--max-diff-size``). ``None`` values are ignored.

    Returns:
        A validated, frozen BackendConfig.

    Raises:
        GlobalConfigError: If config.yaml is unreadable or holds invalid values.
    """
    load_dotenv()

    settings = _file_settings(global_config.load_global_config())

    env_mode = os.getenv(MODE_ENV_VAR)
    if env_mode:
        settings["mode"] = env_mode
    env_url = os.getenv(RELAY_URL_ENV_VAR)
    if env_url:
        settings["relay_url"] = env_url

    # Environment first, then the credentials file
    api_key = os.getenv(API_KEY_ENV_VAR) or global_config.get_credential(API_KEY_ENV_VAR)
    if api_key:
        settings["api_key"] = api_key

    settings.update({k: v for k, v in overrides.items() if v is not None})

    if isinstance(settings.get("mode"), str):
        try:
            settings["mode"] = BackendMode(settings["mode"].lower())
        except ValueError:
            raise GlobalConfigError(
                f"Invalid backend mode: {settings['mode']!r} (expected 'relay' or 'direct')"
            )

    try:
        return BackendConfig(**settings)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid configuration:\n{e}")
