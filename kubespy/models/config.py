"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class KubeConfig:
    """Kubernetes client configuration."""

    context: str = ""
    default_namespace: str = "default"


@dataclass
class WatchConfig:
    """Resource watch configuration."""

    timeout_seconds: int = 300
    max_retries: int = 5
    backoff_base: float = 1.0
    backoff_max: float = 30.0


@dataclass
class OutputConfig:
    """Rendered output configuration."""

    color: bool = True


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"
    format: str = "json"


@dataclass
class KubeSpyConfig:
    """Top-level kubespy configuration."""

    kube: KubeConfig = field(default_factory=KubeConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
