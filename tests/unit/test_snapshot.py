"""
Tests for the snapshot reader - fallbacks must hold for every store state
"""

from unittest.mock import Mock

import pytest

from habitwidget.snapshot import (
    DEFAULT_CONTENT,
    DEFAULT_TITLE,
    SnapshotReader,
    WidgetSnapshot,
)
from habitwidget.store.base import SharedStore
from habitwidget.store.memory import MemoryStore


class BrokenStore(SharedStore):
    """Store whose backing storage always fails"""

    name = "broken"

    def _read_all(self):
        raise OSError("storage unavailable")


class TestSnapshotReader:
    """Test fallback resolution"""

    def test_both_present_returned_unchanged(self):
        """Test present values come back exactly as stored"""
        store = MemoryStore(values={"widget_title": "  3 Left ", "widget_content": "Water,\nStretch"})
        snapshot = SnapshotReader(store).read()
        assert snapshot.title == "  3 Left "
        assert snapshot.content == "Water,\nStretch"

    @pytest.mark.parametrize("content", [None, "Water"])
    def test_title_fallback_independent_of_content(self, content):
        """Test missing title falls back whether or not content is present"""
        values = {} if content is None else {"widget_content": content}
        snapshot = SnapshotReader(MemoryStore(values=values)).read()
        assert snapshot.title == "Today's Habits"

    @pytest.mark.parametrize("title", [None, "3 Left"])
    def test_content_fallback_independent_of_title(self, title):
        """Test missing content falls back whether or not title is present"""
        values = {} if title is None else {"widget_title": title}
        snapshot = SnapshotReader(MemoryStore(values=values)).read()
        assert snapshot.content == "No habits for today"

    def test_empty_store_uses_both_defaults(self, empty_store):
        """Test both fallbacks apply together"""
        assert SnapshotReader(empty_store).read() == WidgetSnapshot(DEFAULT_TITLE, DEFAULT_CONTENT)

    def test_empty_string_is_present(self):
        """Test an empty string is a value, not an absence"""
        store = MemoryStore(values={"widget_title": "", "widget_content": ""})
        snapshot = SnapshotReader(store).read()
        assert snapshot.title == ""
        assert snapshot.content == ""

    def test_non_string_value_reads_as_absent(self):
        """Test wrongly typed values fall back"""
        store = MemoryStore(values={"widget_title": 3, "widget_content": ["Water"]})
        assert SnapshotReader(store).read() == WidgetSnapshot.default()

    def test_unreadable_store_uses_defaults(self):
        """Test store failure degrades to defaults instead of raising"""
        snapshot = SnapshotReader(BrokenStore("group.test")).read()
        assert snapshot == WidgetSnapshot.default()

    def test_fallback_logged_below_error(self, caplog):
        """Test a failed read is logged as a warning, not an error"""
        store = Mock()
        store.get_many.side_effect = RuntimeError("boom")
        SnapshotReader(store).read()
        assert "boom" in caplog.text
        assert all(record.levelname == "WARNING" for record in caplog.records)

    def test_reader_never_raises(self):
        """Test even a misbehaving accessor cannot break read()"""
        store = Mock()
        store.get_many.side_effect = RuntimeError("boom")
        assert SnapshotReader(store).read() == WidgetSnapshot.default()

    def test_reads_both_keys_in_one_call(self, full_store):
        """Test the pair is fetched together"""
        store = Mock(wraps=full_store)
        SnapshotReader(store).read()
        store.get_many.assert_called_once_with(("widget_title", "widget_content"))

    def test_reads_current_contents_each_time(self):
        """Test reads are not cached"""
        store = MemoryStore()
        reader = SnapshotReader(store)
        assert reader.read().title == DEFAULT_TITLE
        store.values["widget_title"] = "1 Left"
        assert reader.read().title == "1 Left"


class TestWidgetSnapshot:
    """Test snapshot value object"""

    def test_immutable(self):
        """Test snapshot fields cannot be reassigned"""
        snapshot = WidgetSnapshot("a", "b")
        with pytest.raises(AttributeError):
            snapshot.title = "c"

    def test_static_entries(self):
        """Test placeholder and preview texts"""
        assert WidgetSnapshot.placeholder() == WidgetSnapshot("Today's Habits", "No habits yet")
        assert WidgetSnapshot.preview() == WidgetSnapshot("Today's Habits", "Loading...")
