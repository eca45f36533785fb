"""Core app services for configuration and logging."""

from .config import (
    AppConfig,
    clamp_dimension,
    clamp_updates_sec,
    load_config,
    new_settings,
    remember_file,
    save_config,
)
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "clamp_dimension",
    "clamp_updates_sec",
    "configure_logging",
    "get_logger",
    "load_config",
    "new_settings",
    "remember_file",
    "save_config",
]
