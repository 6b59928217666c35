"""Face (color) parsing and rendering to ANSI and prompt_toolkit styles."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any

# Standard ANSI color names
COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# Bright color variants
BRIGHT_COLORS = {
    "bright black": 8,
    "bright red": 9,
    "bright green": 10,
    "bright yellow": 11,
    "bright blue": 12,
    "bright magenta": 13,
    "bright cyan": 14,
    "bright white": 15,
    # Aliases
    "gray": 8,
    "grey": 8,
}

# Text attributes and their SGR codes
ATTRIBUTES = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "blink": 5,
    "reverse": 7,
    "hidden": 8,
    "strikethrough": 9,
}

ATTRIBUTE_ALIASES = {
    "inverse": "reverse",
    "strike": "strikethrough",
}

ANSI_STYLE_NAMES = [
    "ansiblack", "ansired", "ansigreen", "ansiyellow",
    "ansiblue", "ansimagenta", "ansicyan", "ansiwhite",
    "ansibrightblack", "ansibrightred", "ansibrightgreen", "ansibrightyellow",
    "ansibrightblue", "ansibrightmagenta", "ansibrightcyan", "ansibrightwhite",
]

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

Color = str | int


@dataclass(frozen=True)
class Face:
    """Display attributes painted over a category's matches.

    Attributes:
        fg: Foreground color (name, ``#rrggbb``, or 256-color index)
        bg: Background color (same forms as ``fg``)
        bold: Bold attribute
        dim: Dim attribute
        italic: Italic attribute
        underline: Underline attribute
        blink: Blink attribute
        reverse: Reverse/inverse attribute
        hidden: Hidden attribute
        strikethrough: Strikethrough attribute
    """

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    hidden: bool = False
    strikethrough: bool = False

    @property
    def is_empty(self) -> bool:
        return self == Face()

    def to_ansi(self) -> str:
        """Convert to an ANSI SGR escape sequence (empty for an empty face)."""
        codes: list[str] = []

        for name, code in ATTRIBUTES.items():
            if getattr(self, name):
                codes.append(str(code))

        if self.fg is not None:
            codes.append(_ansi_color(self.fg, foreground=True))
        if self.bg is not None:
            codes.append(_ansi_color(self.bg, foreground=False))

        if not codes:
            return ""
        return f"\033[{';'.join(codes)}m"

    def to_prompt_toolkit_style(self) -> str:
        """Convert to a prompt_toolkit style string."""
        parts: list[str] = []

        for name in ATTRIBUTES:
            if getattr(self, name):
                parts.append("strike" if name == "strikethrough" else name)

        if self.fg is not None:
            parts.append(_style_color(self.fg))
        if self.bg is not None:
            parts.append(f"bg:{_style_color(self.bg)}")

        return " ".join(parts)


ANSI_RESET = "\033[0m"


def _ansi_color(color: Color, foreground: bool) -> str:
    """Convert a single color to its SGR parameter string."""
    base = 30 if foreground else 40
    bright_base = 90 if foreground else 100
    extended = 38 if foreground else 48

    if isinstance(color, int):
        if 0 <= color <= 7:
            return str(base + color)
        if 8 <= color <= 15:
            return str(bright_base + color - 8)
        return f"{extended};5;{color}"

    if color.startswith("#"):
        r, g, b = _hex_to_rgb(color)
        return f"{extended};2;{r};{g};{b}"

    if color in COLORS:
        return str(base + COLORS[color])
    return str(bright_base + BRIGHT_COLORS[color] - 8)


def _style_color(color: Color) -> str:
    """Convert a single color to prompt_toolkit notation."""
    if isinstance(color, int):
        if color <= 15:
            return ANSI_STYLE_NAMES[color]
        return _xterm_to_hex(color)

    if color.startswith("#"):
        r, g, b = _hex_to_rgb(color)
        return f"#{r:02x}{g:02x}{b:02x}"

    if color in COLORS:
        return ANSI_STYLE_NAMES[COLORS[color]]
    return ANSI_STYLE_NAMES[BRIGHT_COLORS[color]]


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _xterm_to_hex(index: int) -> str:
    """Approximate an xterm 256-color index as ``#rrggbb``."""
    if index >= 232:
        level = 8 + (index - 232) * 10
        return f"#{level:02x}{level:02x}{level:02x}"

    levels = (0, 95, 135, 175, 215, 255)
    index -= 16
    r, g, b = levels[index // 36], levels[(index // 6) % 6], levels[index % 6]
    return f"#{r:02x}{g:02x}{b:02x}"


def _parse_single_color(value: str | int) -> Color:
    """Validate and normalize one color value."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"Not a color: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= 255:
            raise ValueError(f"Color index out of range: {value}")
        return value

    text = value.strip().lower()
    if text.isdigit():
        return _parse_single_color(int(text))
    if HEX_COLOR.match(text):
        return text
    if text.startswith("bright") and not text.startswith("bright "):
        text = f"bright {text[6:]}"
    if text in COLORS or text in BRIGHT_COLORS:
        return text
    raise ValueError(f"Unknown color: {value!r}")


class FaceParser:
    """Parser for color specifications."""

    def parse(self, spec: str | int | dict[str, Any] | None) -> Face:
        """Parse a color specification.

        Args:
            spec: Color string like "bold red on white" or "#ce5c00", or a
                mapping like {"fg": "red", "bg": "#202020", "bold": True}

        Returns:
            Face object

        Raises:
            ValueError: If the specification names an unknown color or attribute,
                or is not a string, number or mapping

        Examples:
            >>> face = FaceParser().parse("bold red on white")
            >>> face.fg, face.bg, face.bold
            ('red', 'white', True)
        """
        if spec is None:
            return Face()
        if isinstance(spec, dict):
            return self._parse_mapping(spec)
        if isinstance(spec, str):
            return self._parse_string(spec)
        return Face(fg=_parse_single_color(spec))

    def _parse_string(self, spec: str) -> Face:
        values: dict[str, Any] = {}
        target = "fg"
        parts = spec.lower().split()

        i = 0
        while i < len(parts):
            part = ATTRIBUTE_ALIASES.get(parts[i], parts[i])

            if part in ATTRIBUTES:
                values[part] = True
            elif part == "on":
                target = "bg"
            elif part == "bright" and i + 1 < len(parts):
                values[target] = _parse_single_color(f"bright {parts[i + 1]}")
                i += 1
            else:
                values[target] = _parse_single_color(part)
            i += 1

        return Face(**values)

    def _parse_mapping(self, spec: dict[str, Any]) -> Face:
        known = {f.name for f in fields(Face)}
        values: dict[str, Any] = {}

        for key, value in spec.items():
            name = ATTRIBUTE_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown face attribute: {key!r}")
            if name in ("fg", "bg"):
                values[name] = None if value is None else _parse_single_color(value)
            else:
                values[name] = bool(value)

        return Face(**values)


def parse_face(spec: str | int | dict[str, Any] | None) -> Face:
    """Parse a color specification.

    Args:
        spec: Color string or mapping

    Returns:
        Face object
    """
    return FaceParser().parse(spec)


def paint(text: str, face: Face) -> str:
    """Wrap text in the face's ANSI escapes."""
    prefix = face.to_ansi()
    if not prefix or not text:
        return text
    return f"{prefix}{text}{ANSI_RESET}"
