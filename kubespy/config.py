"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from kubespy.models.config import (
    KubeConfig,
    KubeSpyConfig,
    LogConfig,
    OutputConfig,
    WatchConfig,
)
from kubespy.observability.logging import LOG_FORMATS


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBESPY_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float, min_val: float = 0.0) -> float:
    return max(float(_env(key, str(default))), min_val)


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {LOG_FORMATS}")
    return value.lower()


def _validate_namespace(value: str) -> str:
    if not value or "/" in value:
        raise ValueError(f"Invalid default namespace: {value!r}")
    return value


def load_config() -> KubeSpyConfig:
    """Load configuration from KUBESPY_* environment variables."""
    backoff_base = _env_float("WATCH_BACKOFF_BASE", 1.0, min_val=0.0)
    return KubeSpyConfig(
        kube=KubeConfig(
            context=_env("CONTEXT", ""),
            default_namespace=_validate_namespace(_env("NAMESPACE", "default")),
        ),
        watch=WatchConfig(
            timeout_seconds=_env_int("WATCH_TIMEOUT", 300, min_val=30, max_val=3600),
            max_retries=_env_int("WATCH_MAX_RETRIES", 5, min_val=0, max_val=20),
            backoff_base=backoff_base,
            backoff_max=_env_float("WATCH_BACKOFF_MAX", 30.0, min_val=backoff_base),
        ),
        output=OutputConfig(
            color=_env_bool("COLOR", True),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
