"""Tests for the viewer module."""

from pathlib import Path

import pytest

from dired_rainbow.editor.hooks import ListingEvent
from dired_rainbow.editor.viewer import ListingViewer


def static_lister(text):
    """Lister that always returns text and records its calls."""
    calls = []

    def lister(paths, switches):
        calls.append((list(paths), switches))
        return text

    lister.calls = calls
    return lister


def directory_lister(directory: Path):
    """Lister that lists the files of directory in `ls -l` shape."""

    def lister(paths, switches):
        return "\n".join(
            f"-rw-r--r--  1 u g  120 Jan  1 00:00 {path.name}"
            for path in sorted(directory.iterdir())
        )

    return lister


def record_events(viewer):
    events = []
    for event in ListingEvent:
        viewer.hooks.subscribe(event, lambda event=event: events.append(event))
    return events


class TestListing:
    """Tests for showing a listing."""

    def test_initial_listing_from_lister(self, registry, sample_listing):
        lister = static_lister(sample_listing)

        viewer = ListingViewer(registry, ["."], lister=lister)

        assert lister.calls == [(["."], "-al")]
        assert viewer.lines[0].startswith("  drwxr-xr-x")
        assert not any(line.startswith("total") for line in viewer.lines)
        assert len(viewer.highlighter.keywords) == len(registry)

    def test_initial_listing_given(self, registry, sample_listing):
        lister = static_lister("")

        viewer = ListingViewer(registry, listing=sample_listing, lister=lister)

        assert lister.calls == []
        assert viewer.buffer.text.split("\n")[4].endswith("main.py")

    def test_switches_from_config(self, registry, sample_listing):
        from dired_rainbow.config.loader import load_config_from_string

        config = load_config_from_string("config:\n  listing_switches: -alh\n")
        lister = static_lister(sample_listing)

        ListingViewer(registry, config=config, lister=lister)

        assert lister.calls == [([], "-alh")]

    def test_path_at(self, registry, sample_listing):
        viewer = ListingViewer(registry, listing=sample_listing)

        assert viewer.path_at(4) == Path("main.py")
        assert viewer.path_at(7) == Path("lib")
        assert viewer.path_at(100) is None

    def test_path_at_multi_directory(self, registry, make_entry):
        listing = "\n".join(["  /tmp/a:", make_entry("x.py"), "", "  /tmp/b:", make_entry("y.py")])

        viewer = ListingViewer(registry, listing=listing)

        assert viewer.path_at(0) is None
        assert viewer.path_at(1) == Path("/tmp/a/x.py")
        assert viewer.path_at(4) == Path("/tmp/b/y.py")

    def test_cursor_movement(self, registry, sample_listing):
        viewer = ListingViewer(registry, listing=sample_listing)

        viewer.run_command("next-line")
        viewer.run_command("next-line")
        viewer.run_command("previous-line")

        assert viewer.current_row() == 1

    def test_status_shows_categories(self, registry, sample_listing):
        viewer = ListingViewer(registry, listing=sample_listing)
        viewer.buffer.cursor_position = viewer.buffer.document.translate_row_col_to_index(4, 0)

        assert viewer._status_text() == [("class:status", " [source]")]


class TestCommands:
    """Tests for viewer commands and the events they emit."""

    def test_unknown_command(self, registry):
        viewer = ListingViewer(registry, listing="")

        with pytest.raises(ValueError):
            viewer.run_command("explode")

    def test_quit(self, registry):
        viewer = ListingViewer(registry, listing="")

        viewer.run_command("quit")

        assert viewer.should_exit

    def test_revert(self, registry, sample_listing):
        lister = static_lister(sample_listing)
        viewer = ListingViewer(registry, listing="", lister=lister)
        events = record_events(viewer)

        viewer.run_command("revert")

        assert len(lister.calls) == 1
        assert events == [ListingEvent.REVERTED]
        assert viewer.message == "Listing reverted"
        assert len(viewer.lines) == 9

    def test_toggle_details(self, registry, sample_listing):
        viewer = ListingViewer(registry, listing=sample_listing)
        events = record_events(viewer)

        viewer.run_command("toggle-details")

        assert events == [ListingEvent.VIEW_TOGGLED]
        assert viewer.buffer.text.split("\n")[4] == "  main.py"
        assert viewer.lines[4].endswith("Jan  1 00:00 main.py")
        assert viewer.lexer.hide_details

        viewer.run_command("toggle-details")

        assert viewer.buffer.text.split("\n")[4] == viewer.lines[4]

    def test_toggle_keeps_row(self, registry, sample_listing):
        viewer = ListingViewer(registry, listing=sample_listing)
        for _ in range(3):
            viewer.next_line()

        viewer.toggle_details()

        assert viewer.current_row() == 3

    def test_rename(self, registry, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        viewer = ListingViewer(registry, [str(tmp_path)], lister=directory_lister(tmp_path))
        events = record_events(viewer)

        viewer.run_command("rename")
        assert viewer.renaming == tmp_path / "a.txt"
        assert viewer.minibuffer.text == "a.txt"

        assert viewer.finish_rename("b.py")

        assert (tmp_path / "b.py").exists()
        assert not (tmp_path / "a.txt").exists()
        assert viewer.lines == ["  -rw-r--r--  1 u g  120 Jan  1 00:00 b.py"]
        assert events == [ListingEvent.RENAME_FINISHED]
        assert viewer.renaming is None

    def test_rename_from_minibuffer(self, registry, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        viewer = ListingViewer(registry, [str(tmp_path)], lister=directory_lister(tmp_path))

        viewer.rename()
        viewer.minibuffer.text = "c.txt"

        assert viewer.finish_rename()
        assert (tmp_path / "c.txt").exists()

    def test_rename_failure(self, registry, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        viewer = ListingViewer(registry, [str(tmp_path)], lister=directory_lister(tmp_path))
        events = record_events(viewer)

        viewer.rename()

        assert not viewer.finish_rename("missing/b.txt")
        assert (tmp_path / "a.txt").exists()
        assert events == [ListingEvent.RENAME_ABORTED]
        assert viewer.message.startswith("Rename failed")

    def test_abort_rename(self, registry, tmp_path):
        (tmp_path / "a.txt").write_text("a")
        viewer = ListingViewer(registry, [str(tmp_path)], lister=directory_lister(tmp_path))
        events = record_events(viewer)

        viewer.rename()
        viewer.abort_rename()
        viewer.abort_rename()

        assert events == [ListingEvent.RENAME_ABORTED]
        assert viewer.renaming is None
        assert (tmp_path / "a.txt").exists()

    def test_rename_without_entry(self, registry):
        viewer = ListingViewer(registry, listing="  /tmp:")

        viewer.rename()

        assert viewer.renaming is None
        assert viewer.message == "No file on this line"

    def test_finish_without_rename(self, registry):
        viewer = ListingViewer(registry, listing="")

        assert not viewer.finish_rename("x")

    def test_style(self, registry):
        viewer = ListingViewer(registry, listing="")

        style = viewer._create_style()

        assert ("source", "#87d75f") in style.style_rules
        assert ("status", "reverse") in style.style_rules
