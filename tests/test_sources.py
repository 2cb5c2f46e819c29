"""Tests for event sources."""

from pathlib import Path

from themesync.models import FileEvent
from themesync.sync.sources import is_hidden, scan_directory


def test_scan_directory_yields_buffered_events(tmp_path):
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "site.css").write_bytes(b"a { }")
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "settings_data.json").write_text("{}")
    (tmp_path / ".DS_Store").write_bytes(b"\x00")

    events = list(scan_directory(tmp_path))

    assert [e.relative.replace("\\", "/") for e in events] == [
        "assets/site.css",
        "config/settings_data.json",
    ]
    assert all(e.is_buffer() for e in events)
    assert events[0].contents == b"a { }"


def test_is_hidden():
    base = Path("/proj")
    assert is_hidden(Path("/proj/.git/HEAD"), base)
    assert not is_hidden(Path("/proj/assets/site.css"), base)


def test_file_event_constructors(tmp_path):
    path = tmp_path / "snippets" / "foo.liquid"
    path.parent.mkdir()
    path.write_text("{{ x }}")

    created = FileEvent.from_path(path, tmp_path)
    removed = FileEvent.deleted(path, tmp_path)

    assert created.is_buffer() and not created.is_null()
    assert removed.is_null() and not removed.is_buffer()
    assert not removed.is_stream()
    assert removed.relative.replace("\\", "/") == "snippets/foo.liquid"
