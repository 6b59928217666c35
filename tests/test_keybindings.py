"""Tests for the keybindings module."""

import pytest
from prompt_toolkit.keys import Keys

from dired_rainbow.config.defaults import DEFAULT_KEYBINDINGS
from dired_rainbow.config.loader import load_config_from_string
from dired_rainbow.editor.keybindings import KeyBindingManager, parse_key_spec
from dired_rainbow.editor.viewer import ListingViewer


class TestParseKeySpec:
    """Tests for parse_key_spec function."""

    def test_parse_ctrl_keys(self):
        assert parse_key_spec("ctrl-a") == Keys.ControlA
        assert parse_key_spec("Ctrl-G") == Keys.ControlG

    def test_parse_alt_keys(self):
        assert parse_key_spec("alt-x") == (Keys.Escape, "x")

    def test_parse_single_char_case_sensitive(self):
        assert parse_key_spec("R") == "R"
        assert parse_key_spec("r") == "r"
        assert parse_key_spec("(") == "("

    def test_parse_named_keys(self):
        assert parse_key_spec("enter") == Keys.ControlM
        assert parse_key_spec("down") == Keys.Down
        assert parse_key_spec("space") == " "

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            parse_key_spec("hyper-q")
        with pytest.raises(ValueError):
            parse_key_spec("ctrl-1")


class TestKeyBindingManager:
    """Tests for KeyBindingManager class."""

    def test_defaults(self, registry):
        viewer = ListingViewer(registry, listing="")
        manager = KeyBindingManager(viewer.config, viewer)

        assert manager.bindings == DEFAULT_KEYBINDINGS
        assert len(manager.get_bindings().bindings) == len(DEFAULT_KEYBINDINGS)

    def test_configured_keys_override(self, registry, sample_config):
        viewer = ListingViewer(registry, config=sample_config, listing="")
        manager = KeyBindingManager(sample_config, viewer)

        assert manager.bindings["x"] == "quit"
        assert manager.bindings["q"] == "quit"

    def test_unknown_command(self, registry):
        config = load_config_from_string("keybindings:\n  z: explode\n")
        viewer = ListingViewer(registry, config=config, listing="")

        with pytest.raises(ValueError):
            KeyBindingManager(config, viewer).get_bindings()

    def test_unknown_key(self, registry):
        config = load_config_from_string("keybindings:\n  hyper-z: quit\n")
        viewer = ListingViewer(registry, config=config, listing="")

        with pytest.raises(ValueError):
            KeyBindingManager(config, viewer).get_bindings()
