"""Configuration loading and schema definitions."""

from dired_rainbow.config.loader import load_config
from dired_rainbow.config.schema import (
    CategoryConfig,
    Config,
    GlobalConfig,
    Theme,
)

__all__ = [
    "CategoryConfig",
    "Config",
    "GlobalConfig",
    "Theme",
    "load_config",
]
