"""Key binding management for the listing viewer."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.filters import Filter, to_filter
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from dired_rainbow.config.defaults import DEFAULT_KEYBINDINGS

if TYPE_CHECKING:
    from dired_rainbow.config.schema import Config
    from dired_rainbow.editor.viewer import ListingViewer


# Named keys usable in a listing; single characters, ctrl-<x> and alt-<x>
# are handled by parse_key_spec
KEY_MAPPING: dict[str, str | Keys] = {
    "enter": Keys.ControlM,
    "ret": Keys.ControlM,
    "escape": Keys.Escape,
    "esc": Keys.Escape,
    "space": " ",
    "spc": " ",
    "del": Keys.Delete,
    "up": Keys.Up,
    "down": Keys.Down,
    "home": Keys.Home,
    "end": Keys.End,
    "pgup": Keys.PageUp,
    "pgdn": Keys.PageDown,
    "f5": Keys.F5,
}


def parse_key_spec(key_spec: str) -> str | Keys | tuple[str | Keys, ...]:
    """Parse a key specification string to prompt_toolkit key.

    Args:
        key_spec: Key specification like "ctrl-a", "alt-b", "enter", "g"

    Returns:
        prompt_toolkit key specification

    Raises:
        ValueError: If the key is not recognized
    """
    # Single characters are case-sensitive ("R" is not "r")
    if len(key_spec) == 1:
        return key_spec

    key_lower = key_spec.lower()

    if key_lower in KEY_MAPPING:
        return KEY_MAPPING[key_lower]

    if key_lower.startswith("ctrl-") and len(key_lower) == 6 and key_lower[5].isalpha():
        return getattr(Keys, f"Control{key_lower[5].upper()}")

    if key_lower.startswith("alt-") and len(key_spec) == 5:
        return (Keys.Escape, key_spec[4])

    raise ValueError(f"Unknown key: {key_spec!r}")


class KeyBindingManager:
    """Builds the viewer's key bindings from defaults and configuration."""

    def __init__(self, config: Config, viewer: ListingViewer) -> None:
        """Initialize key binding manager.

        Args:
            config: Configuration with keybindings
            viewer: The viewer whose commands are bound
        """
        self.config = config
        self.viewer = viewer

    @property
    def bindings(self) -> dict[str, str]:
        """Key to command mapping, with configured keys overriding defaults."""
        return {**DEFAULT_KEYBINDINGS, **self.config.keybindings}

    def get_bindings(self, filter: Filter | bool = True) -> KeyBindings:
        """Create key bindings for the listing.

        Args:
            filter: Condition under which the bindings are active

        Returns:
            KeyBindings object
        """
        kb = KeyBindings()
        active = to_filter(filter)

        for key_spec, command in self.bindings.items():
            self._bind_key(kb, key_spec, command, active)

        return kb

    def _bind_key(self, kb: KeyBindings, key_spec: str, command: str, active: Filter) -> None:
        """Bind a key to a viewer command."""
        key = parse_key_spec(key_spec)
        self.viewer.check_command(command)

        def make_handler(name: str) -> Callable:
            def handler(event) -> None:  # type: ignore
                self.viewer.run_command(name)
                if self.viewer.should_exit:
                    event.app.exit()

            return handler

        if isinstance(key, tuple):
            kb.add(*key, filter=active)(make_handler(command))
        else:
            kb.add(key, filter=active)(make_handler(command))
