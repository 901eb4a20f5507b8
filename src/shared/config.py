"""
Centralized configuration for the course lifecycle & billing service.

- Frozen dataclass populated from OS env, with a .env file loaded through python-dotenv.
- Strong typing & validation in __post_init__.
- Immutable singleton via functools.lru_cache.
- Credentials in DSNs never logged (masked).
"""

from __future__ import annotations

import functools
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, cast
from urllib.parse import urlparse

from dotenv import load_dotenv

from shared.infrastructure.observability.logger import get_logger

_logger = get_logger(__name__)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _mask_url(value: Optional[str]) -> str:
    if not value:
        return "<unset>"
    parsed = urlparse(value)
    if parsed.password:
        return value.replace(parsed.password, "***")
    return value


def _get_env_str(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    v = os.getenv(key, default)
    if required and (v is None or str(v).strip() == ""):
        raise ValueError(f"Missing required env var: {key}")
    return v


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


def _get_env_int(key: str, default: int) -> int:
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Env var {key} must be an integer")


def _validate_choice(value: str, *, choices: tuple[str, ...], key: str) -> str:
    if value not in choices:
        raise ValueError(f"{key} must be one of {choices}, got {value!r}")
    return value


def _validate_url(value: Optional[str], *, key: str, allowed_schemes: tuple[str, ...]) -> Optional[str]:
    if value in (None, ""):
        return None
    parsed = urlparse(value)
    if parsed.scheme not in allowed_schemes or not parsed.netloc:
        raise ValueError(f"{key} must be a valid URL with scheme in {allowed_schemes}")
    return value


def _validate_database_url(value: str, *, key: str) -> str:
    allowed = ("postgresql+asyncpg://", "sqlite+aiosqlite://")
    if not value.startswith(allowed):
        raise ValueError(f"{key} must start with one of {allowed}")
    return value


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
EnvName = Literal["local", "dev", "staging", "prod", "test"]
LogFormat = Literal["json", "console"]

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./dev.db"


@dataclass(frozen=True)
class Settings:
    # Environment
    environment: EnvName = "local"
    debug: bool = False

    # Database
    database_url: str = DEFAULT_DATABASE_URL
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False
    auto_create_schema: bool = False

    # Realtime fan-out across instances (optional)
    redis_url: Optional[str] = None
    realtime_channel: str = "course-events"

    # Observability
    log_level: str = "INFO"
    log_format: Optional[LogFormat] = None

    # Paths
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent.parent)

    # Derived/computed flags (filled in __post_init__)
    is_prod: bool = field(init=False)
    is_test: bool = field(init=False)
    is_sqlite: bool = field(init=False)
    json_logs: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "environment",
            _validate_choice(self.environment, choices=("local", "dev", "staging", "prod", "test"), key="ENVIRONMENT"),
        )

        object.__setattr__(self, "database_url", _validate_database_url(self.database_url, key="DATABASE_URL"))
        if self.redis_url:
            _validate_url(self.redis_url, key="REDIS_URL", allowed_schemes=("redis", "rediss"))

        if self.database_pool_size <= 0:
            raise ValueError("DATABASE_POOL_SIZE must be > 0")
        if self.database_max_overflow < 0:
            raise ValueError("DATABASE_MAX_OVERFLOW must be >= 0")

        if not self.realtime_channel.strip():
            raise ValueError("REALTIME_CHANNEL must be non-empty")

        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        if self.log_format is not None:
            _validate_choice(self.log_format, choices=("json", "console"), key="LOG_FORMAT")

        env = self.environment
        object.__setattr__(self, "is_prod", env == "prod")
        object.__setattr__(self, "is_test", env == "test")
        object.__setattr__(self, "is_sqlite", self.database_url.startswith("sqlite"))
        # console for local/dev unless told otherwise
        json_logs = self.log_format == "json" if self.log_format else env in ("staging", "prod")
        object.__setattr__(self, "json_logs", json_logs)

    # Safe dict (for debug prints without credentials)
    def safe_dict(self) -> dict:
        return {
            "environment": self.environment,
            "debug": self.debug,
            "database_url": _mask_url(self.database_url),
            "database_pool_size": self.database_pool_size,
            "database_max_overflow": self.database_max_overflow,
            "database_echo": self.database_echo,
            "auto_create_schema": self.auto_create_schema,
            "redis_url": _mask_url(self.redis_url),
            "realtime_channel": self.realtime_channel,
            "log_level": self.log_level,
            "log_format": "json" if self.json_logs else "console",
            "base_dir": str(self.base_dir),
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
def load_settings() -> Settings:
    """Build settings from the current environment (no caching)."""
    env_file = Path(__file__).resolve().parent.parent.parent / ".env"
    if env_file.exists():
        load_dotenv(dotenv_path=str(env_file), override=False)

    environment = cast(EnvName, _get_env_str("ENVIRONMENT", "local") or "local")
    return Settings(
        environment=environment,
        debug=_get_env_bool("DEBUG", False),
        database_url=_get_env_str("DATABASE_URL", DEFAULT_DATABASE_URL) or DEFAULT_DATABASE_URL,
        database_pool_size=_get_env_int("DATABASE_POOL_SIZE", 5),
        database_max_overflow=_get_env_int("DATABASE_MAX_OVERFLOW", 10),
        database_echo=_get_env_bool("DATABASE_ECHO", False),
        auto_create_schema=_get_env_bool("AUTO_CREATE_SCHEMA", environment in ("local", "test")),
        redis_url=_get_env_str("REDIS_URL", None) or None,
        realtime_channel=_get_env_str("REALTIME_CHANNEL", "course-events") or "course-events",
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        log_format=cast(Optional[LogFormat], _get_env_str("LOG_FORMAT", None) or None),
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = load_settings()
    _logger.info("settings_loaded", settings=settings.safe_dict())
    return settings
