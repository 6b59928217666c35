"""Command-line interface for dired-rainbow."""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import TextIO

import yaml
from pydantic import ValidationError

from dired_rainbow import __version__
from dired_rainbow.config.loader import load_config
from dired_rainbow.core.color import paint
from dired_rainbow.core.errors import ConfigFileError, DiredRainbowError
from dired_rainbow.core.listing import ListingHighlighter, normalize_listing
from dired_rainbow.core.ls import list_directory
from dired_rainbow.core.registry import Registry, create_registry
from dired_rainbow.core.rules import describe_rule
from dired_rainbow.editor.hooks import ListingEvent, ListingHooks, attach
from dired_rainbow.editor.lexer import render_ansi
from dired_rainbow.editor.viewer import view_listing

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="dired-rainbow",
        description="Color directory listing entries by file type",
        epilog="Example: ls -al | dired-rainbow   or   dired-rainbow -i ~/src",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/dired-rainbow/config.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/dired-rainbow/conf.d/)",
    )

    parser.add_argument(
        "--theme",
        "-t",
        metavar="NAME",
        help="Theme to use",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors",
    )

    parser.add_argument(
        "--list-categories",
        "-l",
        action="store_true",
        help="List categories in installation order and exit",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Check the configured categories and exit (status 1 on errors)",
    )

    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        help="Browse the listing interactively",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to list (reads a listing from stdin when piped)",
    )

    return parser.parse_args(args)


def print_categories(registry: Registry, color: bool, out: TextIO) -> None:
    """Print each category with its face, rule and compiled pattern."""
    for category in registry.categories():
        label = paint(category.identifier, category.face) if color else category.identifier
        print(f"{label}", file=out)
        print(f"    color:   {category.color}", file=out)
        print(f"    rule:    {describe_rule(category.rule)}", file=out)
        try:
            pattern = registry.compiled(category.identifier).source
        except DiredRainbowError as e:
            pattern = f"<error: {e}>"
        print(f"    pattern: {pattern}", file=out)


def print_errors(registry: Registry, out: TextIO) -> None:
    for error in registry.errors:
        print(f"Error: {error}", file=out)


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    # Load configuration
    try:
        config = load_config(
            config_path=parsed.config,
            dropin_dir=parsed.config_dir,
        )
    except (OSError, yaml.YAMLError, ValidationError, ConfigFileError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if parsed.no_color:
        config.config.color = False

    registry = create_registry(config, parsed.theme)

    if parsed.check:
        print_errors(registry, sys.stderr)
        if registry.errors:
            return 1
        print(f"{len(registry)} categories OK")
        return 0

    if parsed.list_categories:
        print_categories(registry, config.config.color, sys.stdout)
        return 0

    # The viewer reads keys from stdin, so it cannot also take a piped listing
    if parsed.interactive and not sys.stdin.isatty():
        print(
            "Error: --interactive needs a terminal on stdin; pass paths instead of piping a listing",
            file=sys.stderr,
        )
        return 1

    # Read the listing
    try:
        if not parsed.paths and not sys.stdin.isatty():
            listing = sys.stdin.read()
        else:
            listing = list_directory(parsed.paths, config.config.listing_switches)
    except subprocess.CalledProcessError as e:
        print(f"Error: {e.stderr.strip() or e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        if parsed.interactive:
            view_listing(registry, parsed.paths, config, listing)
            return 0

        highlighter = ListingHighlighter()
        hooks = ListingHooks()
        attach(registry, highlighter, hooks)
        hooks.emit(ListingEvent.ENTERED)

        text = normalize_listing(listing)
        print(render_ansi(text, registry, highlighter, config.config.color))
        return 0

    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
