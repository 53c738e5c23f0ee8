"""Tests for the directory selection model."""

from core.models import DirectoryEntry, ScanDirectory
from core.selection import STATUS_PREVIOUSLY_SCANNED, DirectorySelectionModel


class TestDirectoryEntry:
    def test_root_entry_defaults(self):
        entry = DirectoryEntry.root("/music")
        assert entry.is_root
        assert entry.root_path == "/music"
        assert not entry.selected
        assert entry.status == "Ready"
        assert entry.last_scanned == "Never"

    def test_child_entry_defaults(self):
        entry = DirectoryEntry.child("/music/rock", "/music")
        assert not entry.is_root
        assert entry.root_path == "/music"
        assert entry.selected
        assert entry.status == "Subdirectory"


class TestDirectorySelectionModel:
    def test_refresh_lists_recorded_roots_unselected(self, store):
        store.record_scanned_root("/x")
        store.record_scanned_root("/y")

        model = DirectorySelectionModel(store)
        model.refresh()

        assert [e.path for e in model.entries] == ["/x", "/y"]
        assert all(not e.selected for e in model.entries)
        assert all(e.status == STATUS_PREVIOUSLY_SCANNED for e in model.entries)
        assert all(e.is_root for e in model.entries)
        assert all(e.last_scanned != "Never" for e in model.entries)

    def test_refresh_discards_previous_selection(self, memory_store):
        memory_store.record_scanned_root("/x")
        model = DirectorySelectionModel(memory_store)
        model.refresh()
        model.toggle_all(True)

        model.refresh()

        assert model.selected_paths() == []

    def test_refresh_drops_duplicate_paths(self):
        class DuplicatingStore:
            def list_scan_directories(self):
                return [
                    ScanDirectory("/x", 1, None),
                    ScanDirectory("/x", 2, None),
                    ScanDirectory("/y", 3, None),
                ]

        model = DirectorySelectionModel(DuplicatingStore())
        model.refresh()

        assert [e.path for e in model.entries] == ["/x", "/y"]

    def test_toggle_all(self, memory_store):
        for p in ("/a", "/b", "/c"):
            memory_store.record_scanned_root(p)
        model = DirectorySelectionModel(memory_store)
        model.refresh()

        model.toggle_all(True)
        assert model.selected_paths() == ["/a", "/b", "/c"]
        assert model.has_selection()

        model.toggle_all(False)
        assert model.selected_paths() == []
        assert not model.has_selection()

    def test_set_selected_keeps_list_order(self, memory_store):
        for p in ("/a", "/b", "/c"):
            memory_store.record_scanned_root(p)
        model = DirectorySelectionModel(memory_store)
        model.refresh()

        model.set_selected(2, True)
        model.set_selected(0, True)

        assert model.selected_paths() == ["/a", "/c"]

    def test_clear_all_empties_list(self, store):
        store.record_scanned_root("/x")
        model = DirectorySelectionModel(store)
        model.refresh()
        assert len(model) == 1

        model.clear_all()
        model.refresh()

        assert len(model) == 0
        assert store.list_scanned_roots() == []
