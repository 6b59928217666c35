"""Pytest configuration and fixtures."""

import pytest

from dired_rainbow.config.loader import load_config_from_string
from dired_rainbow.config.schema import Config
from dired_rainbow.core.listing import ListingHighlighter
from dired_rainbow.core.registry import Registry


def entry(name: str, mode: str = "-rw-r--r--", date: str = "Jan 1 00:00") -> str:
    """Build a dired-shaped listing line."""
    return f"  {mode}  1 u g  120 {date} {name}"


@pytest.fixture
def make_entry():
    """Factory for listing lines."""
    return entry


@pytest.fixture
def registry() -> Registry:
    """Registry with the built-in categories."""
    return Registry().init()


@pytest.fixture
def highlighter(registry) -> ListingHighlighter:
    """Highlighter with the built-in categories installed."""
    highlighter = ListingHighlighter()
    registry.install_all(highlighter)
    return highlighter


@pytest.fixture
def sample_listing() -> str:
    """Raw `ls -al` output."""
    return """total 24
drwxr-xr-x  4 u g 4096 Jan  1 00:00 .
drwxr-xr-x 10 u g 4096 Jan  1 00:00 ..
-rw-r--r--  1 u g  120 Jan  1 00:00 .bashrc
-rw-r--r--  1 u g  512 Jan  1 00:00 Makefile
-rw-r--r--  1 u g 2048 Jan  1 00:00 main.py
-rw-r--r--  1 u g 2048 Jan  1 00:00 main.pyc
-rwxr-xr-x  1 u g  300 Jan  1 00:00 run
lrwxrwxrwx  1 u g    7 Jan  1 00:00 lib -> main.py
-rw-r--r--  1 u g 9000 Jan  1  2020 photo.JPG
"""


@pytest.fixture
def sample_config() -> Config:
    """Sample user configuration for testing."""
    yaml_content = """
config:
  color: true
  theme: night

categories:
  source:
    color: "bold green"
  notes:
    color: "#ffaf00"
    extensions: [note, NOTE]
  Logs:
    color: yellow
    regexps: ['.*\\.log\\.[0-9]+']
  broken:
    color: red
  conflicting:
    color: red
    extensions: [x]
    regexp: '^  -'
  badregex:
    color: red
    regexps: ['(unclosed']

themes:
  night:
    categories:
      hidden: "dim"
      Image: "#ff0000"

order: [hidden, omit]
disabled: [disk]

keybindings:
  x: quit
"""
    return load_config_from_string(yaml_content)


@pytest.fixture
def empty_config() -> Config:
    """Empty configuration for testing."""
    return Config()
