"""Category registry and the installer that feeds the line highlighter."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from dired_rainbow.config.defaults import BUILTIN_CATEGORIES_YAML
from dired_rainbow.config.schema import CategoryConfig, ColorSpec, Config
from dired_rainbow.core.color import Face, parse_face
from dired_rainbow.core.compiler import CompiledPattern, compile_category
from dired_rainbow.core.errors import DiredRainbowError, MalformedRule
from dired_rainbow.core.rules import Rule, make_rule

if TYPE_CHECKING:
    from dired_rainbow.core.listing import ListingHighlighter

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass
class Category:
    """A named file classification with a face and a matching rule.

    The face is resolved from ``color`` once, when the category is built.
    """

    identifier: str
    color: ColorSpec | None
    rule: Rule
    face: Face = field(init=False)

    def __post_init__(self) -> None:
        self.identifier = self.identifier.lower()
        self.face = parse_face(self.color)

    @classmethod
    def create(
        cls,
        identifier: str,
        color: ColorSpec | None = None,
        *,
        extensions: Iterable[str] | None = None,
        filenames: Iterable[str] | None = None,
        regexps: Iterable[str] | None = None,
        regexp: str | None = None,
    ) -> Category:
        """Build a category from its rule kinds.

        Raises:
            MalformedRule: If the rule kinds are missing or conflicting
            ValueError: If the color cannot be parsed
        """
        try:
            rule = make_rule(extensions, filenames, regexps, regexp)
        except MalformedRule as e:
            raise e.for_category(identifier) from None
        return cls(identifier, color, rule)


@dataclass(frozen=True)
class CategoryError:
    """A category that could not be configured or installed."""

    identifier: str
    error: Exception

    def __str__(self) -> str:
        return str(self.error)


class Registry:
    """Holds categories in installation order, with their compiled patterns."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._compiled: dict[str, CompiledPattern] = {}
        self.errors: list[CategoryError] = []

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(list(self._categories.values()))

    def init(self) -> Registry:
        """Populate the built-in categories."""
        self.register_builtins()
        return self

    def register_builtins(self) -> None:
        """Register (or re-register) every built-in category in the built-in order."""
        data = yaml.safe_load(BUILTIN_CATEGORIES_YAML)
        builtins = Config(categories=data["categories"])

        for category in builtins.categories.values():
            self._configure(category)
        self.reorder(data["order"])

    def get(self, identifier: str) -> Category | None:
        return self._categories.get(identifier.lower())

    def categories(self) -> list[Category]:
        """All categories in installation order."""
        return list(self._categories.values())

    @property
    def identifiers(self) -> list[str]:
        return list(self._categories)

    def register(self, category: Category) -> None:
        """Compile and add a category, or replace the one with the same identifier in place.

        A successful registration clears the errors recorded for that identifier.

        Raises:
            PatternCompileFailure: If the category's rule does not compile; the
                registry is left unchanged
        """
        pattern = compile_category(category)
        self._categories[category.identifier] = category
        self._compiled[category.identifier] = pattern
        self.errors = [e for e in self.errors if e.identifier != category.identifier]

    def define(
        self,
        identifier: str,
        color: ColorSpec | None = None,
        **rule_kinds: Any,
    ) -> Category:
        """Build, compile and register a category.

        Args:
            identifier: Category identifier
            color: Color specification
            **rule_kinds: extensions, filenames, regexps and/or regexp

        Returns:
            The registered category

        Raises:
            MalformedRule: If the rule kinds are missing or conflicting
            PatternCompileFailure: If a regexp does not compile
            ValueError: If the color cannot be parsed
        """
        category = Category.create(identifier, color, **rule_kinds)
        self.register(category)
        return category

    def update(self, identifier: str, *, color: ColorSpec | None = _UNSET, **rule_kinds: Any) -> Category:
        """Change the color and/or rule of an existing category.

        Omitted parts are kept; a new rule is compiled right away.

        Raises:
            KeyError: If the category does not exist
        """
        current = self._categories[identifier.lower()]
        new_color = current.color if color is _UNSET else color

        if not any(value is not None for value in rule_kinds.values()):
            category = Category(current.identifier, new_color, current.rule)
            self._categories[category.identifier] = category
            return category

        return self.define(current.identifier, new_color, **rule_kinds)

    def remove(self, identifier: str) -> bool:
        """Remove a category; returns False if it did not exist."""
        key = identifier.lower()
        self._compiled.pop(key, None)
        return self._categories.pop(key, None) is not None

    def reorder(self, identifiers: Iterable[str]) -> None:
        """Move the listed categories to the front, in the given order.

        Unlisted categories keep their relative order after them.
        """
        ordered: dict[str, Category] = {}
        for identifier in identifiers:
            key = identifier.lower()
            if key not in self._categories:
                logger.warning("Unknown category in order: %s", identifier)
                continue
            ordered[key] = self._categories[key]

        for key, category in self._categories.items():
            ordered.setdefault(key, category)
        self._categories = ordered

    def compiled(self, identifier: str) -> CompiledPattern:
        """Get the compiled pattern of a category, compiling it once.

        Raises:
            KeyError: If the category does not exist
            PatternCompileFailure: If the category's rule does not compile
        """
        key = identifier.lower()
        if key not in self._compiled:
            self._compiled[key] = compile_category(self._categories[key])
        return self._compiled[key]

    def compile_all(self) -> list[CompiledPattern]:
        """Compile every category, skipping and reporting those that fail."""
        patterns: list[CompiledPattern] = []
        for identifier in self._categories:
            try:
                patterns.append(self.compiled(identifier))
            except DiredRainbowError as e:
                self._report(identifier, e)
        return patterns

    def install_all(self, highlighter: ListingHighlighter) -> int:
        """Install every category's pattern into the highlighter.

        Replaces whatever this registry installed before, so calling it again
        after the listing changes is safe.

        Returns:
            Number of patterns installed
        """
        patterns = self.compile_all()
        highlighter.remove_keywords(self)
        highlighter.add_keywords(self, patterns)
        logger.debug("Installed %d category patterns", len(patterns))
        return len(patterns)

    def apply_config(self, config: Config, theme: str | None = None) -> None:
        """Apply user categories, theme colors, disabled categories and order.

        Each category is applied on its own; errors are recorded in
        ``errors`` and do not stop the remaining categories.
        """
        for category in config.categories.values():
            try:
                self._configure(category)
            except (DiredRainbowError, ValueError) as e:
                self._report(category.name, e)

        selected = config.get_theme(theme)
        if selected is not None:
            for identifier, color in selected.categories.items():
                if identifier not in self:
                    logger.warning("Theme '%s' colors unknown category: %s", selected.name, identifier)
                    continue
                try:
                    self.update(identifier, color=color)
                except ValueError as e:
                    self._report(identifier, e)

        for identifier in config.disabled:
            self.remove(identifier)

        if config.order:
            self.reorder(config.order)

    def _configure(self, config: CategoryConfig) -> Category:
        existing = self.get(config.name)

        if existing is not None and not config.has_rule:
            if config.color is None:
                return existing
            return self.update(existing.identifier, color=config.color)

        color = config.color
        if color is None and existing is not None:
            color = existing.color
        return self.define(config.name, color, **config.rule_kinds())

    def _report(self, identifier: str, error: Exception) -> None:
        """Record an error once per identifier and message."""
        if any(e.identifier == identifier and str(e) == str(error) for e in self.errors):
            return
        logger.warning("Skipping category '%s': %s", identifier, error)
        self.errors.append(CategoryError(identifier, error))


def create_registry(config: Config | None = None, theme: str | None = None) -> Registry:
    """Create a registry with the built-in categories and an optional user config."""
    registry = Registry().init()
    if config is not None:
        registry.apply_config(config, theme)
    return registry
