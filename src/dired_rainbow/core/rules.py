"""Matching rules: how a category recognizes listing lines."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dired_rainbow.core.errors import MalformedRule


@dataclass(frozen=True)
class Extensions:
    """Files whose name ends in ``.`` plus one of the extensions (case-sensitive)."""

    extensions: tuple[str, ...]


@dataclass(frozen=True)
class Filenames:
    """Files whose name contains one of the literal fragments."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class RawFragments:
    """Regular expression fragments, any of which must match the whole filename."""

    fragments: tuple[str, ...]


@dataclass(frozen=True)
class FullLinePattern:
    """A complete regular expression evaluated against the full listing line."""

    regexp: str


ListRule = Extensions | Filenames | RawFragments


@dataclass(frozen=True)
class CombinedRule:
    """Several list rules of a single category, matched as alternatives."""

    parts: tuple[ListRule, ...]


Rule = Extensions | Filenames | RawFragments | FullLinePattern | CombinedRule


def _clean(kind: str, values: Iterable[str] | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        raise MalformedRule(f"'{kind}' must be a list of strings, not a string")
    if not isinstance(values, Iterable) or isinstance(values, dict):
        raise MalformedRule(f"'{kind}' must be a list of strings, not {type(values).__name__}")

    cleaned = tuple(values)
    for value in cleaned:
        if not isinstance(value, str) or not value:
            raise MalformedRule(f"'{kind}' contains an empty or non-string entry: {value!r}")
    return cleaned


def _strip_dot(extension: str) -> str:
    stripped = extension[1:] if extension.startswith(".") else extension
    if not stripped:
        raise MalformedRule(f"extension {extension!r} is empty")
    return stripped


def make_rule(
    extensions: Iterable[str] | None = None,
    filenames: Iterable[str] | None = None,
    regexps: Iterable[str] | None = None,
    regexp: str | None = None,
) -> Rule:
    """Build a rule from its populated kinds.

    Args:
        extensions: Bare extensions ("py" or ".py")
        filenames: Literal filename fragments
        regexps: Regex fragments matched against the whole filename
        regexp: A full-line regular expression (exclusive with the other kinds)

    Returns:
        The rule shape for the populated kinds; a CombinedRule when several
        list kinds are populated

    Raises:
        MalformedRule: If no kind is populated, or regexp is combined with another kind
    """
    exts = tuple(_strip_dot(e) for e in _clean("extensions", extensions))
    names = _clean("filenames", filenames)
    fragments = _clean("regexps", regexps)

    if regexp is not None:
        if not isinstance(regexp, str) or not regexp:
            raise MalformedRule("'regexp' must be a non-empty string")
        if exts or names or fragments:
            raise MalformedRule("'regexp' cannot be combined with extensions, filenames or regexps")
        return FullLinePattern(regexp)

    parts: list[ListRule] = []
    if exts:
        parts.append(Extensions(exts))
    if names:
        parts.append(Filenames(names))
    if fragments:
        parts.append(RawFragments(fragments))

    if not parts:
        raise MalformedRule("no extensions, filenames, regexps or regexp given")
    if len(parts) == 1:
        return parts[0]
    return CombinedRule(tuple(parts))


def describe_rule(rule: Rule) -> str:
    """Short human-readable summary of a rule."""
    match rule:
        case Extensions(extensions=exts):
            return f"extensions: {', '.join(exts)}"
        case Filenames(names=names):
            return f"filenames: {', '.join(names)}"
        case RawFragments(fragments=fragments):
            return f"regexps: {', '.join(fragments)}"
        case FullLinePattern(regexp=regexp):
            return f"regexp: {regexp}"
        case CombinedRule(parts=parts):
            return "; ".join(describe_rule(part) for part in parts)
    raise TypeError(f"Not a rule: {rule!r}")
