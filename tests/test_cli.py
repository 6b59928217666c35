"""Tests for the command-line interface."""

import io
import re
import sys

import pytest

from dired_rainbow.cli import main, parse_args, print_categories
from dired_rainbow.core.errors import PatternCompileFailure
from dired_rainbow.core.listing import normalize_listing


@pytest.fixture
def no_user_config(tmp_path):
    """Arguments that keep the user's own configuration out of the way."""
    return ["-c", str(tmp_path / "config.yaml"), "--config-dir", str(tmp_path / "conf.d")]


@pytest.fixture
def stdin(monkeypatch):
    """Replace stdin with piped text."""

    def set_stdin(text):
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return set_stdin


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args([])

        assert args.paths == []
        assert args.config is None
        assert not args.interactive
        assert not args.no_color

    def test_flags(self):
        args = parse_args(["-i", "-t", "mono", "--no-color", "src", "docs"])

        assert args.interactive
        assert args.theme == "mono"
        assert args.no_color
        assert args.paths == ["src", "docs"]


class TestMain:
    """Tests for main function."""

    def test_render_stdin(self, no_user_config, stdin, sample_listing, capsys):
        stdin(sample_listing)

        assert main(no_user_config) == 0

        out = capsys.readouterr().out
        assert "\033[38;2;135;215;95mmain.py\033[0m" in out
        assert "total 24" not in out

    def test_render_without_color(self, no_user_config, stdin, sample_listing, capsys):
        stdin(sample_listing)

        assert main([*no_user_config, "--no-color"]) == 0

        assert capsys.readouterr().out == normalize_listing(sample_listing) + "\n"

    def test_render_directory(self, no_user_config, tmp_path, capsys):
        (tmp_path / "main.py").write_text("")

        assert main([*no_user_config, "--no-color", str(tmp_path)]) == 0

        assert capsys.readouterr().out.rstrip().endswith(" main.py")

    def test_missing_path(self, no_user_config, tmp_path, capsys):
        assert main([*no_user_config, str(tmp_path / "missing")]) == 1

        assert capsys.readouterr().err.startswith("Error:")

    def test_list_categories(self, no_user_config, capsys):
        assert main([*no_user_config, "--no-color", "--list-categories"]) == 0

        out = capsys.readouterr().out
        assert "source\n    color:   #87d75f\n" in out
        assert "    rule:    regexp" in out
        assert out.index("hidden") < out.index("execute")

    def test_check_builtins(self, no_user_config, capsys):
        assert main([*no_user_config, "--check"]) == 0

        assert capsys.readouterr().out.endswith("categories OK\n")

    def test_check_reports_errors(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("categories:\n  badregex:\n    color: red\n    regexps: ['(unclosed']\n")

        assert main(["-c", str(config), "--config-dir", str(tmp_path / "conf.d"), "--check"]) == 1

        assert "'badregex'" in capsys.readouterr().err

    def test_bad_yaml(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("categories: [\n")

        assert main(["-c", str(config), "--list-categories"]) == 1

        assert "Error loading configuration" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("config:\n  color: [1, 2]\n")

        assert main(["-c", str(config), "--list-categories"]) == 1

    def test_theme_option(self, no_user_config, stdin, make_entry, capsys):
        stdin(make_entry(".bashrc") + "\n")

        assert main([*no_user_config, "--theme", "mono"]) == 0

        assert "\033[2m.bashrc\033[0m" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "dired-rainbow 0.1.0" in capsys.readouterr().out

    def test_interactive_with_piped_listing(self, no_user_config, stdin, sample_listing, capsys):
        stdin(sample_listing)

        assert main([*no_user_config, "-i"]) == 1

        assert "--interactive needs a terminal" in capsys.readouterr().err


class TestPrintCategories:
    """Tests for print_categories function."""

    def test_pattern_failure_is_printed(self, registry, monkeypatch):
        def failing(identifier):
            raise PatternCompileFailure(identifier, "(", re.error("missing ), unterminated subpattern"))

        monkeypatch.setattr(registry, "compiled", failing)
        out = io.StringIO()

        print_categories(registry, False, out)

        assert "    pattern: <error: Invalid pattern for category 'source'" in out.getvalue()
