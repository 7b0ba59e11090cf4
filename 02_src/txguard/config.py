"""Project-level configuration and path helpers."""

import logging
import os
import threading
from pathlib import Path
from typing import Any, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .adapters import GRPCClientAdapter
from .models import ReportMode

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "txguard.log"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

PathLike = Union[str, Path]


class GuardSettings(BaseModel):
    """Process-wide guard configuration, read at use time."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    enabled: bool = True
    managers: list[Any] = Field(default_factory=list)
    adapters: list[Any] = Field(default_factory=lambda: [GRPCClientAdapter()])
    log: bool = True
    log_level: str = "error"
    mode: ReportMode = ReportMode.LOG

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        level = str(value).strip().lower()
        if level == "warn":
            level = "warning"
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
            )
        return level

    @property
    def log_level_number(self) -> int:
        """Numeric logging level for ``log_level``."""
        return LOG_LEVELS[self.log_level]


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def load_settings(env_file: PathLike | None = None) -> GuardSettings:
    """
    Build settings from the environment.

    Args:
        env_file: Optional .env file loaded before reading variables.
                  Existing environment variables win.

    Returns:
        GuardSettings populated from TXGUARD_* variables.
    """
    if env_file is not None:
        load_dotenv(env_file)

    return GuardSettings(
        enabled=_env_flag("TXGUARD_ENABLED", True),
        log=_env_flag("TXGUARD_LOG", True),
        log_level=os.getenv("TXGUARD_LOG_LEVEL") or "error",
        mode=ReportMode((os.getenv("TXGUARD_MODE") or ReportMode.LOG.value).lower()),
    )


_settings: GuardSettings | None = None
_settings_lock = threading.Lock()


def get_settings() -> GuardSettings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the process-wide settings; the next get_settings() reloads them."""
    global _settings
    with _settings_lock:
        _settings = None


def resolve_log_path(env_value: PathLike | None = None) -> Path:
    """Resolve TXGUARD_LOG_FILE to an absolute path."""
    if not env_value:
        return DEFAULT_LOG_PATH

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate
