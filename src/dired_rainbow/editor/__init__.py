"""Listing presentation: prompt_toolkit lexer, lifecycle hooks and viewer."""

from dired_rainbow.editor.hooks import ListingEvent, ListingHooks, attach, detach
from dired_rainbow.editor.lexer import ListingLexer, render_ansi
from dired_rainbow.editor.viewer import ListingViewer

__all__ = [
    "ListingEvent",
    "ListingHooks",
    "ListingLexer",
    "ListingViewer",
    "attach",
    "detach",
    "render_ansi",
]
