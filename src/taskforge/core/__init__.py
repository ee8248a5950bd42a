"""Core utilities: configuration, logging, errors, models and the query engine."""

from taskforge.core.config import DbConfig, PoolConfig, Settings, get_settings
from taskforge.core.logging import Logger, color_palette, configure_logging, log

__all__ = [
    "DbConfig",
    "PoolConfig",
    "Settings",
    "get_settings",
    "Logger",
    "color_palette",
    "configure_logging",
    "log",
]
