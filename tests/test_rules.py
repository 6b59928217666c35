"""Tests for the rules module."""

import pytest

from dired_rainbow.core.errors import MalformedRule
from dired_rainbow.core.rules import (
    CombinedRule,
    Extensions,
    Filenames,
    FullLinePattern,
    RawFragments,
    describe_rule,
    make_rule,
)


class TestMakeRule:
    """Tests for make_rule function."""

    def test_extensions(self):
        """Test building an extension rule."""
        assert make_rule(extensions=["py", "go"]) == Extensions(("py", "go"))

    def test_extensions_leading_dot_stripped(self):
        """Test that '.py' and 'py' are the same extension."""
        assert make_rule(extensions=[".py", "go"]) == Extensions(("py", "go"))

    def test_extensions_keep_case(self):
        """Test that extensions are not case-folded."""
        rule = make_rule(extensions=["gz", "GZ"])

        assert rule == Extensions(("gz", "GZ"))

    def test_filenames(self):
        """Test building a filename rule."""
        assert make_rule(filenames=["__pycache__"]) == Filenames(("__pycache__",))

    def test_regexps(self):
        """Test building a raw fragment rule."""
        assert make_rule(regexps=["README.*"]) == RawFragments(("README.*",))

    def test_regexp(self):
        """Test building a full-line rule."""
        assert make_rule(regexp="^  l") == FullLinePattern("^  l")

    def test_combined_kinds(self):
        """Test that several list kinds combine in a fixed order."""
        rule = make_rule(regexps=[".*~"], extensions=["orig"], filenames=["Thumbs.db"])

        assert rule == CombinedRule(
            (Extensions(("orig",)), Filenames(("Thumbs.db",)), RawFragments((".*~",)))
        )

    def test_no_kind_fails(self):
        """Test that a rule without any kind is malformed."""
        with pytest.raises(MalformedRule):
            make_rule()

    def test_empty_lists_fail(self):
        """Test that empty lists count as missing kinds."""
        with pytest.raises(MalformedRule):
            make_rule(extensions=[], filenames=[])

    def test_regexp_with_extensions_fails(self):
        """Test that regexp and extensions are mutually exclusive."""
        with pytest.raises(MalformedRule):
            make_rule(extensions=["py"], regexp="^  -")

    def test_regexp_with_regexps_fails(self):
        """Test that regexp excludes raw fragments too."""
        with pytest.raises(MalformedRule):
            make_rule(regexps=["a"], regexp="^  -")

    def test_string_instead_of_list_fails(self):
        """Test that a bare string is not taken as a list of characters."""
        with pytest.raises(MalformedRule):
            make_rule(extensions="py")

    def test_empty_entry_fails(self):
        """Test that empty entries are rejected."""
        with pytest.raises(MalformedRule):
            make_rule(filenames=["ok", ""])

    def test_lone_dot_extension_fails(self):
        """Test that '.' is not an extension."""
        with pytest.raises(MalformedRule):
            make_rule(extensions=["."])

    def test_error_names_category(self):
        """Test attributing an error to a category."""
        with pytest.raises(MalformedRule) as excinfo:
            make_rule()

        error = excinfo.value.for_category("omit")

        assert error.identifier == "omit"
        assert "omit" in str(error)


class TestDescribeRule:
    """Tests for describe_rule function."""

    def test_describe_extensions(self):
        assert describe_rule(Extensions(("py", "go"))) == "extensions: py, go"

    def test_describe_combined(self):
        rule = make_rule(extensions=["orig"], filenames=["Thumbs.db"])

        assert describe_rule(rule) == "extensions: orig; filenames: Thumbs.db"

    def test_describe_not_a_rule(self):
        with pytest.raises(TypeError):
            describe_rule("py")
