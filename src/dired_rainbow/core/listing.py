"""Listing line layout and the line highlighter that paints category spans."""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dired_rainbow.core.compiler import CompiledPattern

# A dired line starts with the mark column and a separator column ("  " when
# unmarked), followed by the file type and permission bits of `ls -l`.
MARKER = r"[ *DCI!]"
FILE_TYPE = r"[-bcdlpsDn?]"
PERMISSIONS = r"[-rwxsStTlL]{9}"
LINE_PREFIX = rf"{MARKER}\s*{FILE_TYPE}{PERMISSIONS}[.+@]?"

MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)"
# `ls -l` dates: "Jan  1 00:00", "Jan  1  2020", "1 Jan 00:00"
LS_DATE = rf"(?:{MONTH}\s+\d{{1,2}}|\d{{1,2}}\s+{MONTH})\s+(?:\d{{1,2}}:\d{{2}}|\d{{4}})"
# --time-style=long-iso and full-iso
ISO_DATE = r"\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}(?::\d{2}(?:\.\d+)?(?:\s+[-+]\d{4})?)?"
# Link count, owner, group, size and timestamp, up to the filename
TO_FILENAME = rf"\s.*?\s(?:{LS_DATE}|{ISO_DATE})\s"

LINK_ARROW = " -> "

_ENTRY_RE = re.compile(rf"^{LINE_PREFIX}{TO_FILENAME}(?P<file>.*)$")
_LINK_RE = re.compile(rf"^{MARKER}\s*l{PERMISSIONS}")
_LS_ENTRY_RE = re.compile(rf"^{FILE_TYPE}{PERMISSIONS}[.+@]?\s")
_TOTAL_RE = re.compile(r"^\s*total\s+\S+\s*$")


def is_link(line: str) -> bool:
    """Check if a listing line describes a symbolic link."""
    return _LINK_RE.match(line) is not None


def trim_link_target(line: str, start: int, end: int) -> tuple[int, int]:
    """Cut a span short of the " -> target" part of a symlink line."""
    if is_link(line):
        arrow = line.find(LINK_ARROW, start, end)
        if arrow != -1:
            return start, arrow
    return start, end


def filename_span(line: str) -> tuple[int, int] | None:
    """Locate the filename column of a listing line.

    Args:
        line: A dired-shaped listing line

    Returns:
        (start, end) of the filename, or None if the line is not an entry
    """
    match = _ENTRY_RE.match(line)
    if match is None or match.start("file") == match.end("file"):
        return None
    return trim_link_target(line, *match.span("file"))


def filename(line: str) -> str | None:
    """Return the filename of a listing line, if it is an entry."""
    span = filename_span(line)
    if span is None:
        return None
    return line[span[0] : span[1]]


def details_range(line: str) -> tuple[int, int] | None:
    """Range of the columns between the mark area and the filename."""
    match = _ENTRY_RE.match(line)
    if match is None:
        return None
    return 2, match.start("file")


def hide_details(line: str) -> str:
    """Drop the permission, owner, size and date columns of an entry line."""
    hidden = details_range(line)
    if hidden is None:
        return line
    return line[: hidden[0]] + line[hidden[1] :]


def normalize_listing(text: str) -> str:
    """Turn `ls -l` output into dired-shaped listing lines.

    Entry lines and directory headers get the two-column mark area, and
    "total" lines are dropped. Lines that already carry the mark area are
    kept as they are.
    """
    lines: list[str] = []

    for line in text.splitlines():
        if _TOTAL_RE.match(line):
            continue
        if _LS_ENTRY_RE.match(line) or (line.endswith(":") and not line.startswith(" ")):
            lines.append(f"  {line}")
        else:
            lines.append(line)

    return "\n".join(lines)


@dataclass(frozen=True)
class Span:
    """A run of a line painted with one category's face."""

    start: int
    end: int
    category: str


@dataclass(frozen=True)
class Keyword:
    """A compiled pattern installed in the highlighter by an owner."""

    owner: Hashable
    pattern: CompiledPattern


class ListingHighlighter:
    """Applies installed patterns to listing lines.

    Patterns are applied in installation order; where two patterns paint the
    same characters, the one installed last wins.
    """

    def __init__(self) -> None:
        self._keywords: list[Keyword] = []

    @property
    def keywords(self) -> list[Keyword]:
        return list(self._keywords)

    def add_keywords(self, owner: Hashable, patterns: Iterable[CompiledPattern]) -> None:
        """Install patterns after all currently installed ones."""
        self._keywords.extend(Keyword(owner, pattern) for pattern in patterns)

    def remove_keywords(self, owner: Hashable) -> int:
        """Remove every pattern installed by owner.

        Returns:
            Number of patterns removed
        """
        before = len(self._keywords)
        self._keywords = [k for k in self._keywords if k.owner != owner]
        return before - len(self._keywords)

    def clear(self) -> None:
        self._keywords.clear()

    def categories_for(self, line: str) -> list[str]:
        """List the categories whose pattern matches line, in installation order."""
        return [
            keyword.pattern.category
            for keyword in self._keywords
            if keyword.pattern.regex.search(line)
        ]

    def highlight_line(self, line: str) -> list[Span]:
        """Paint a single line.

        Args:
            line: Listing line (without trailing newline)

        Returns:
            Non-overlapping spans in line order
        """
        painted: list[str | None] = [None] * len(line)

        for keyword in self._keywords:
            pattern = keyword.pattern
            for match in pattern.regex.finditer(line):
                start, end = pattern.paint_span(match)
                for i in range(start, end):
                    painted[i] = pattern.category

        return _runs(painted)

    def highlight(self, text: str) -> list[list[Span]]:
        """Paint every line of text."""
        return [self.highlight_line(line) for line in text.split("\n")]


def _runs(painted: list[str | None]) -> list[Span]:
    """Collapse per-character categories into spans."""
    spans: list[Span] = []
    start = 0

    for i in range(1, len(painted) + 1):
        if i == len(painted) or painted[i] != painted[start]:
            category = painted[start]
            if category is not None:
                spans.append(Span(start, i, category))
            start = i

    return spans
