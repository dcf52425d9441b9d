from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    log_format: str
    scoring_config_path: str | None
    job_keyword_limit: int
    log_candidate_names: bool


def load_settings() -> Settings:
    return Settings(
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper(),
        log_format=_get_env("LOG_FORMAT", "%(message)s") or "%(message)s",
        scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
        job_keyword_limit=_get_env_int("JOB_KEYWORD_LIMIT", 50),
        log_candidate_names=_get_env_bool("LOG_CANDIDATE_NAMES", False),
    )


settings = load_settings()

if settings.log_level not in _LOG_LEVELS:
    raise RuntimeError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got '{settings.log_level}'.")

if settings.job_keyword_limit <= 0:
    raise RuntimeError("JOB_KEYWORD_LIMIT must be a positive integer.")


def configure_logging(config: Settings | None = None) -> None:
    """Apply process-wide logging setup. The library never calls this on import."""
    active = config or settings
    logging.basicConfig(level=active.log_level, format=active.log_format)


__all__ = ["Settings", "settings", "load_settings", "configure_logging"]
