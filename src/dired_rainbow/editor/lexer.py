"""Lexer for directory listing highlighting, and ANSI rendering of listings."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from dired_rainbow.core.color import ANSI_RESET
from dired_rainbow.core.listing import ListingHighlighter, Span, details_range

if TYPE_CHECKING:
    from dired_rainbow.core.registry import Registry


def _segments(line: str, spans: list[Span]) -> list[tuple[str | None, int, int]]:
    """Split a line into (category, start, end) segments covering all of it."""
    segments: list[tuple[str | None, int, int]] = []
    last_end = 0

    for span in spans:
        if span.start > last_end:
            segments.append((None, last_end, span.start))
        segments.append((span.category, span.start, span.end))
        last_end = span.end

    if last_end < len(line):
        segments.append((None, last_end, len(line)))

    return segments


def _drop_range(
    segments: list[tuple[str | None, int, int]], start: int, end: int
) -> list[tuple[str | None, int, int]]:
    """Remove [start, end) from segments, clipping those that overlap it."""
    kept: list[tuple[str | None, int, int]] = []
    for category, seg_start, seg_end in segments:
        if seg_start < start:
            kept.append((category, seg_start, min(seg_end, start)))
        if seg_end > end:
            kept.append((category, max(seg_start, end), seg_end))
    return kept


class ListingLexer(Lexer):
    """Lexer that paints listing lines with their categories' faces."""

    def __init__(
        self,
        registry: Registry,
        highlighter: ListingHighlighter | None = None,
    ) -> None:
        """Initialize the lexer.

        Args:
            registry: Registry holding the categories and their faces
            highlighter: Highlighter with the registry's patterns installed;
                a new one is created and installed if not given
        """
        self.registry = registry
        if highlighter is None:
            highlighter = ListingHighlighter()
            registry.install_all(highlighter)
        self.highlighter = highlighter

        # Source lines shown with their details columns hidden
        self.hide_details = False
        self.source_lines: list[str] | None = None

        self._styles = self._build_styles()

    def _build_styles(self) -> dict[str, str]:
        """Build prompt_toolkit style dictionary from category faces."""
        styles: dict[str, str] = {}
        for category in self.registry.categories():
            styles[self._category_to_class(category.identifier)] = category.face.to_prompt_toolkit_style()
        return styles

    def _category_to_class(self, category: str) -> str:
        """Convert category identifier to style class name."""
        class_name = category.lower().replace(":", "-").replace(" ", "-")
        return f"class:{class_name}"

    def get_style_dict(self) -> dict[str, str]:
        """Get the style dictionary for prompt_toolkit."""
        return self._styles

    def refresh_styles(self) -> None:
        """Rebuild styles after categories changed."""
        self._styles = self._build_styles()

    def style_line(self, line: str, hide_details: bool = False) -> StyleAndTextTuples:
        """Style one listing line.

        Args:
            line: The full listing line
            hide_details: Drop the details columns from the result

        Returns:
            Styled text tuples
        """
        segments = _segments(line, self.highlighter.highlight_line(line))

        if hide_details:
            hidden = details_range(line)
            if hidden is not None:
                segments = _drop_range(segments, *hidden)

        return [
            (self._category_to_class(category) if category else "", line[start:end])
            for category, start, end in segments
        ]

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        """Lex a document and return a function that returns styled text for each line.

        Args:
            document: The document to lex

        Returns:
            Function that takes a line number and returns styled text tuples
        """
        lines = document.lines
        source = self.source_lines if self.hide_details and self.source_lines is not None else None

        def get_line(line_number: int) -> StyleAndTextTuples:
            """Get styled text for a specific line."""
            if source is not None and line_number < len(source):
                return self.style_line(source[line_number], hide_details=True)
            if line_number < len(lines):
                return self.style_line(lines[line_number])
            return []

        return get_line


def render_ansi(
    text: str,
    registry: Registry,
    highlighter: ListingHighlighter,
    color: bool = True,
) -> str:
    """Paint listing text with ANSI escapes.

    Args:
        text: Listing text
        registry: Registry holding the category faces
        highlighter: Highlighter with the registry's patterns installed
        color: Return the text unchanged when False

    Returns:
        Text with escape sequences around painted spans
    """
    if not color:
        return text

    faces = {category.identifier: category.face.to_ansi() for category in registry.categories()}
    rendered: list[str] = []

    for line in text.split("\n"):
        parts: list[str] = []
        for category, start, end in _segments(line, highlighter.highlight_line(line)):
            chunk = line[start:end]
            prefix = faces.get(category, "") if category else ""
            parts.append(f"{prefix}{chunk}{ANSI_RESET}" if prefix else chunk)
        rendered.append("".join(parts))

    return "\n".join(rendered)
