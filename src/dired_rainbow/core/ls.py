"""Produce listing text by running `ls`."""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from dired_rainbow.core.listing import filename_span


def list_directory(paths: Sequence[str | Path], switches: str = "-al") -> str:
    """Run `ls` on paths and return its output.

    Args:
        paths: Files or directories to list (the current directory if empty)
        switches: Switches for ls; must produce the long format

    Returns:
        The raw `ls` output

    Raises:
        subprocess.CalledProcessError: If ls fails, e.g. for a missing path
    """
    args = ["ls", *shlex.split(switches), "--", *(str(p) for p in paths)]
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=True,
        env={**os.environ, "LC_ALL": "C"},
    )
    return result.stdout


def directory_for_line(lines: Sequence[str], index: int, default: Path) -> Path:
    """Directory the entry at lines[index] belongs to.

    Multi-directory listings have "dir:" header lines; entries before any
    header belong to default.
    """
    for line in reversed(lines[: index + 1]):
        stripped = line.strip()
        if stripped.endswith(":") and filename_span(line) is None:
            return Path(stripped[:-1])
    return default
