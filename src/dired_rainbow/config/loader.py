"""Configuration loading: built-in defaults, the user's file, then drop-ins."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from dired_rainbow.config.defaults import DEFAULT_CONFIG_YAML
from dired_rainbow.config.schema import Config
from dired_rainbow.core.errors import ConfigFileError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "dired-rainbow"


def config_home() -> Path:
    """Directory holding config.yaml and conf.d/ ($XDG_CONFIG_HOME aware)."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / CONFIG_DIR_NAME


DEFAULT_CONFIG_PATH = config_home() / "config.yaml"
DEFAULT_DROPIN_DIR = config_home() / "conf.d"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Mappings merge key by key and lists are concatenated, so a drop-in can
    add extensions to a category without repeating the existing ones.
    """
    merged = dict(base)

    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = [*current, *value]
        else:
            merged[key] = value

    return merged


def _parse_mapping(text: str, source: str) -> dict[str, Any]:
    data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(source, f"expected a mapping, got {type(data).__name__}")
    return data


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Read one YAML file; a missing file reads as empty."""
    if not path.is_file():
        return {}
    logger.debug("Reading configuration from %s", path)
    return _parse_mapping(path.read_text(), str(path))


def dropin_files(dropin_dir: Path) -> list[Path]:
    """Drop-in files in merge order (*.yaml, then *.yml, each sorted by name)."""
    if not dropin_dir.is_dir():
        return []
    return sorted(dropin_dir.glob("*.yaml")) + sorted(dropin_dir.glob("*.yml"))


def config_layers(config_path: Path, dropin_dir: Path) -> Iterator[dict[str, Any]]:
    """Yield configuration layers, lowest precedence first."""
    yield _parse_mapping(DEFAULT_CONFIG_YAML, "<defaults>")
    yield load_yaml_file(config_path)
    for path in dropin_files(dropin_dir):
        yield load_yaml_file(path)


def load_config(
    config_path: Path | str | None = None,
    dropin_dir: Path | str | None = None,
) -> Config:
    """Load configuration from file and drop-in directory.

    Args:
        config_path: Path to main config file (default: ~/.config/dired-rainbow/config.yaml)
        dropin_dir: Path to drop-in directory (default: ~/.config/dired-rainbow/conf.d/)

    Returns:
        Merged configuration object

    Raises:
        yaml.YAMLError: If a file is not valid YAML
        ConfigFileError: If a file does not hold a mapping
        pydantic.ValidationError: If the merged data does not fit the schema
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    dropin_dir = Path(dropin_dir) if dropin_dir is not None else DEFAULT_DROPIN_DIR

    merged: dict[str, Any] = {}
    for layer in config_layers(config_path, dropin_dir):
        merged = deep_merge(merged, layer)

    return Config(**merged)


def load_config_from_string(yaml_string: str) -> Config:
    """Build a Config from YAML text alone, without the defaults layer."""
    return Config(**_parse_mapping(yaml_string, "<string>"))
