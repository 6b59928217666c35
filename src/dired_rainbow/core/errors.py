"""Exceptions raised while building and compiling categories."""

from __future__ import annotations

import re


class DiredRainbowError(Exception):
    """Base class for all dired-rainbow errors."""


class ConfigFileError(DiredRainbowError):
    """A configuration file that parses as YAML but is not a mapping."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class MalformedRule(DiredRainbowError):
    """A rule with no rule kind, or with conflicting rule kinds."""

    def __init__(self, reason: str, identifier: str = "") -> None:
        self.reason = reason
        self.identifier = identifier
        super().__init__(self._message())

    def _message(self) -> str:
        if self.identifier:
            return f"Malformed rule for category '{self.identifier}': {self.reason}"
        return f"Malformed rule: {self.reason}"

    def for_category(self, identifier: str) -> MalformedRule:
        """Return a copy of this error attributed to a category."""
        return MalformedRule(self.reason, identifier)


class PatternCompileFailure(DiredRainbowError):
    """A user-supplied regular expression does not compile."""

    def __init__(self, identifier: str, pattern: str, error: re.error) -> None:
        self.identifier = identifier
        self.pattern = pattern
        self.error = error
        super().__init__(
            f"Invalid pattern for category '{identifier}': {error} (pattern: {pattern!r})"
        )
