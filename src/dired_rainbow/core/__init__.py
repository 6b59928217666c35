"""Core functionality: faces, rules, rule compiler, registry and highlighter."""

from dired_rainbow.core.color import Face, FaceParser, paint, parse_face
from dired_rainbow.core.compiler import CompiledPattern, compile_category, compile_rule
from dired_rainbow.core.errors import (
    ConfigFileError,
    DiredRainbowError,
    MalformedRule,
    PatternCompileFailure,
)
from dired_rainbow.core.listing import ListingHighlighter, Span, filename_span, normalize_listing
from dired_rainbow.core.registry import Category, CategoryError, Registry, create_registry
from dired_rainbow.core.rules import (
    CombinedRule,
    Extensions,
    Filenames,
    FullLinePattern,
    RawFragments,
    Rule,
    make_rule,
)

__all__ = [
    "Face",
    "FaceParser",
    "paint",
    "parse_face",
    "CompiledPattern",
    "compile_category",
    "compile_rule",
    "ConfigFileError",
    "DiredRainbowError",
    "MalformedRule",
    "PatternCompileFailure",
    "ListingHighlighter",
    "Span",
    "filename_span",
    "normalize_listing",
    "Category",
    "CategoryError",
    "Registry",
    "create_registry",
    "CombinedRule",
    "Extensions",
    "Filenames",
    "FullLinePattern",
    "RawFragments",
    "Rule",
    "make_rule",
]
