"""Configuration loading and management for dagweave."""

from dagweave.core.config.loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
)
from dagweave.core.config.models import DagweaveConfig, GraphConfig, LoggingConfig

__all__ = [
    "ConfigLoader",
    "DagweaveConfig",
    "GraphConfig",
    "LoggingConfig",
    "clear_config_cache",
    "get_default_config",
    "load_config",
]
