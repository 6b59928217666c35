"""Compile category rules into listing-line regular expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from dired_rainbow.core.errors import PatternCompileFailure
from dired_rainbow.core.listing import (
    LINE_PREFIX,
    TO_FILENAME,
    filename_span,
    trim_link_target,
)
from dired_rainbow.core.rules import (
    CombinedRule,
    Extensions,
    Filenames,
    FullLinePattern,
    ListRule,
    RawFragments,
    Rule,
)

if TYPE_CHECKING:
    from dired_rainbow.core.registry import Category

FILE_GROUP = "file"


@dataclass(frozen=True)
class CompiledPattern:
    """A rule compiled to a single regular expression.

    Attributes:
        category: Identifier of the category matches are tagged with
        source: The final pattern string
        regex: The compiled pattern
    """

    category: str
    source: str
    regex: re.Pattern[str]

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None

    def paint_span(self, match: re.Match[str]) -> tuple[int, int]:
        """Return the part of the line the category's face is painted on.

        The ``file`` group when the pattern has one, otherwise the filename
        column, otherwise the whole match.
        """
        line = match.string
        if FILE_GROUP in self.regex.groupindex and match.start(FILE_GROUP) >= 0:
            return trim_link_target(line, *match.span(FILE_GROUP))

        located = filename_span(line)
        if located is not None:
            return located
        return match.span()


def _alternation(items: tuple[str, ...]) -> str:
    return "|".join(items)


def _body(rule: ListRule) -> str:
    """Filename sub-pattern for a list rule."""
    match rule:
        case Extensions(extensions=exts):
            escaped = tuple(re.escape(ext) for ext in exts)
            return rf".*\.(?:{_alternation(escaped)})"
        case Filenames(names=names):
            escaped = tuple(re.escape(name) for name in names)
            return rf".*(?:{_alternation(escaped)}).*"
        case RawFragments(fragments=fragments):
            return f"(?:{_alternation(fragments)})"
    raise TypeError(f"Not a list rule: {rule!r}")


def rule_source(rule: Rule) -> str:
    """Build the final pattern string for a rule.

    Args:
        rule: The rule to compile

    Returns:
        Pattern string; identical input always yields an identical string
    """
    if isinstance(rule, FullLinePattern):
        return rule.regexp

    if isinstance(rule, CombinedRule):
        body = f"(?:{_alternation(tuple(_body(part) for part in rule.parts))})"
    else:
        body = _body(rule)

    return f"^{LINE_PREFIX}{TO_FILENAME}(?P<{FILE_GROUP}>{body})$"


def compile_rule(rule: Rule, category: str = "") -> CompiledPattern:
    """Compile a rule into a pattern tagged with category.

    Args:
        rule: The rule to compile
        category: Category identifier for matches

    Returns:
        CompiledPattern

    Raises:
        PatternCompileFailure: If a user-supplied fragment or regexp is invalid
    """
    source = rule_source(rule)
    try:
        regex = re.compile(source)
    except re.error as e:
        raise PatternCompileFailure(category, source, e) from e
    return CompiledPattern(category=category, source=source, regex=regex)


def compile_category(category: Category) -> CompiledPattern:
    """Compile a category's rule."""
    return compile_rule(category.rule, category.identifier)
