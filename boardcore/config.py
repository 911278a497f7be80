"""Environment-driven engine settings.

Usage:
    from boardcore.config import get_settings

    if get_settings().debug_engine:
        ...

Environment Variables:
    BOARDCORE_DEBUG_ENGINE: Verbose engine tracing (default: off)
    BOARDCORE_ENFORCE_FAILSAFE: Run the move-list failsafe even for games
        flagged ``no-failsafe`` (default: off)
    BOARDCORE_LOG_LEVEL: Log level used by the CLI (default: INFO)
    BOARDCORE_METRICS_ENABLED: Record prometheus metrics (default: on)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in _TRUTHY


@dataclass(frozen=True)
class EngineSettings:
    """Process-wide engine settings, read once from the environment."""

    debug_engine: bool = False
    enforce_failsafe: bool = False
    log_level: str = "INFO"
    metrics_enabled: bool = True

    @classmethod
    def from_env(cls) -> EngineSettings:
        return cls(
            debug_engine=_env_flag("BOARDCORE_DEBUG_ENGINE", "0"),
            enforce_failsafe=_env_flag("BOARDCORE_ENFORCE_FAILSAFE", "0"),
            log_level=os.environ.get("BOARDCORE_LOG_LEVEL", "INFO").upper(),
            metrics_enabled=_env_flag("BOARDCORE_METRICS_ENABLED", "1"),
        )


_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next lookup re-reads the environment."""
    global _settings
    _settings = None
