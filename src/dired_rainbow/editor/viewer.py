"""Interactive listing viewer using prompt_toolkit."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.filters import Condition, has_focus
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import ConditionalContainer, HSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.styles import Style

from dired_rainbow.config.schema import Config
from dired_rainbow.core.listing import ListingHighlighter, filename, hide_details, normalize_listing
from dired_rainbow.core.ls import directory_for_line, list_directory
from dired_rainbow.core.registry import Registry
from dired_rainbow.editor.hooks import ListingEvent, ListingHooks, attach
from dired_rainbow.editor.keybindings import KeyBindingManager
from dired_rainbow.editor.lexer import ListingLexer

logger = logging.getLogger(__name__)

Lister = Callable[[Sequence[str], str], str]


class ListingViewer:
    """Full-screen directory listing with category highlighting."""

    COMMANDS = ("quit", "revert", "toggle-details", "rename", "next-line", "previous-line")

    def __init__(
        self,
        registry: Registry,
        paths: Sequence[str] = (),
        config: Config | None = None,
        listing: str | None = None,
        lister: Lister = list_directory,
    ) -> None:
        """Initialize the viewer.

        Args:
            registry: Registry with the categories to highlight
            paths: Paths passed to ls (current directory if empty)
            config: Configuration object
            listing: Initial listing text (runs ls if None)
            lister: Function producing `ls` output for paths and switches
        """
        self.registry = registry
        self.paths = list(paths)
        self.config = config or Config()
        self.lister = lister

        self.highlighter = ListingHighlighter()
        self.hooks = ListingHooks()
        attach(registry, self.highlighter, self.hooks)
        self.lexer = ListingLexer(registry, self.highlighter)

        self.buffer = Buffer(name="listing", read_only=True, multiline=True)
        self.minibuffer = Buffer(name="minibuffer", multiline=False)

        self._lines: list[str] = []
        self.hide_details = False
        self.renaming: Path | None = None
        self.message = ""
        self.should_exit = False

        # Application (created in run())
        self.app: Application | None = None

        self._set_listing(listing if listing is not None else self._read_listing())
        self.hooks.emit(ListingEvent.ENTERED)

    @property
    def default_directory(self) -> Path:
        if len(self.paths) == 1 and Path(self.paths[0]).is_dir():
            return Path(self.paths[0])
        return Path(".")

    @property
    def lines(self) -> list[str]:
        """The full listing lines, details included."""
        return list(self._lines)

    def _read_listing(self) -> str:
        return self.lister(self.paths, self.config.config.listing_switches)

    def _set_listing(self, text: str) -> None:
        self._lines = normalize_listing(text).split("\n")
        self._show()

    def _show(self) -> None:
        """Put the listing in the buffer, keeping the cursor row."""
        row = self.buffer.document.cursor_position_row
        lines = [hide_details(line) for line in self._lines] if self.hide_details else self._lines

        self.lexer.hide_details = self.hide_details
        self.lexer.source_lines = self._lines

        document = Document("\n".join(lines), 0)
        row = min(row, document.line_count - 1)
        self.buffer.set_document(
            Document(document.text, document.translate_row_col_to_index(row, 0)),
            bypass_readonly=True,
        )

    def current_row(self) -> int:
        return self.buffer.document.cursor_position_row

    def path_at(self, row: int | None = None) -> Path | None:
        """Path of the entry on a row (the cursor row by default)."""
        row = self.current_row() if row is None else row
        if not 0 <= row < len(self._lines):
            return None
        name = filename(self._lines[row])
        if name is None:
            return None
        return directory_for_line(self._lines, row, self.default_directory) / name

    # Commands

    def check_command(self, name: str) -> None:
        """Raise ValueError for an unknown command name."""
        if name not in self.COMMANDS:
            raise ValueError(f"Unknown command: {name!r}")

    def run_command(self, name: str) -> None:
        """Run a viewer command by name."""
        self.check_command(name)
        self.message = ""
        getattr(self, name.replace("-", "_"))()

    def quit(self) -> None:
        self.should_exit = True

    def next_line(self) -> None:
        self.buffer.cursor_down()

    def previous_line(self) -> None:
        self.buffer.cursor_up()

    def revert(self) -> None:
        """Re-read the listing from ls."""
        self._set_listing(self._read_listing())
        self.message = "Listing reverted"
        self.hooks.emit(ListingEvent.REVERTED)

    def toggle_details(self) -> None:
        """Show or hide all columns but the filename."""
        self.hide_details = not self.hide_details
        self._show()
        self.hooks.emit(ListingEvent.VIEW_TOGGLED)

    def rename(self) -> None:
        """Start renaming the entry at the cursor."""
        path = self.path_at()
        if path is None:
            self.message = "No file on this line"
            return

        self.renaming = path
        self.minibuffer.set_document(Document(path.name))
        self.message = f"Rename {path.name} to:"
        if self.app is not None:
            self.app.layout.focus(self.minibuffer)

    def finish_rename(self, new_name: str | None = None) -> bool:
        """Rename the pending entry to new_name (the minibuffer text by default).

        Returns:
            True if the file was renamed
        """
        if self.renaming is None:
            return False

        source = self.renaming
        target = source.parent / (new_name if new_name is not None else self.minibuffer.text)
        self.renaming = None
        self._focus_listing()

        try:
            os.rename(source, target)
        except OSError as e:
            logger.warning("Rename of %s failed: %s", source, e)
            self.message = f"Rename failed: {e}"
            self.hooks.emit(ListingEvent.RENAME_ABORTED)
            return False

        self.message = f"Renamed {source.name} to {target.name}"
        self._set_listing(self._read_listing())
        self.hooks.emit(ListingEvent.RENAME_FINISHED)
        return True

    def abort_rename(self) -> None:
        """Cancel a pending rename."""
        if self.renaming is None:
            return
        self.renaming = None
        self.message = "Rename aborted"
        self._focus_listing()
        self.hooks.emit(ListingEvent.RENAME_ABORTED)

    def _focus_listing(self) -> None:
        if self.app is not None:
            self.app.layout.focus(self.buffer)

    # Application

    def _status_text(self) -> StyleAndTextTuples:
        row = self.current_row()
        categories = self.highlighter.categories_for(self._lines[row]) if row < len(self._lines) else []
        status = f" {self.message}" if self.message else f" [{', '.join(categories)}]"
        return [("class:status", status)]

    def _create_keybindings(self) -> KeyBindings:
        """Create key bindings for the viewer and the rename minibuffer."""
        manager = KeyBindingManager(self.config, self)
        listing = manager.get_bindings(filter=~has_focus(self.minibuffer))

        rename = KeyBindings()
        renaming = has_focus(self.minibuffer)

        @rename.add("enter", filter=renaming)
        def _(event) -> None:  # type: ignore
            self.finish_rename()

        @rename.add("escape", filter=renaming, eager=True)
        @rename.add("c-g", filter=renaming)
        def _(event) -> None:  # type: ignore
            self.abort_rename()

        return merge_key_bindings([listing, rename])

    def _create_style(self) -> Style:
        """Create prompt_toolkit style from category faces."""
        styles = dict(self.lexer.get_style_dict())
        styles.setdefault("class:status", "reverse")
        return Style.from_dict({key.removeprefix("class:"): value for key, value in styles.items()})

    def _create_layout(self) -> Layout:
        """Create the viewer layout."""
        listing = Window(content=BufferControl(buffer=self.buffer, lexer=self.lexer))
        minibuffer = ConditionalContainer(
            Window(content=BufferControl(buffer=self.minibuffer), height=1),
            filter=Condition(lambda: self.renaming is not None),
        )
        status = Window(content=FormattedTextControl(self._status_text), height=1)
        return Layout(HSplit([listing, minibuffer, status]), focused_element=listing)

    def run(self) -> None:
        """Run the viewer until the user quits."""
        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_keybindings(),
            style=self._create_style(),
            full_screen=True,
            mouse_support=False,
        )
        self.app.run()


def view_listing(
    registry: Registry,
    paths: Sequence[str] = (),
    config: Config | None = None,
    listing: str | None = None,
) -> None:
    """Browse a listing interactively.

    Args:
        registry: Registry with the categories to highlight
        paths: Paths to list
        config: Configuration object
        listing: Listing text to show instead of running ls
    """
    ListingViewer(registry, paths, config, listing).run()
