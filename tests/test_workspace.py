"""
Tests for the global file scan and the index lock.
"""

import threading

from lua_index.core.locks import IndexLock
from lua_index.core.paths import path_to_uri
from lua_index.core.workspace import scan_global_files

from conftest import write_lua


class TestScanGlobalFiles:
    """Test scan_global_files."""

    def test_scan_registers_sorted_lua_files(self, index, workspace):
        """Matching files are indexed as globals in sorted order."""
        b = write_lua(workspace, "Scripts/b.lua", "B = 1\n")
        a = write_lua(workspace, "Scripts/a.lua", "A = 1\n")
        write_lua(workspace, "Scripts/notes.txt", "not lua")
        (workspace / "Scripts" / "dir.lua").mkdir()

        registered = scan_global_files(index, str(workspace), ["Scripts/*"])

        assert registered == [path_to_uri(str(a)), path_to_uri(str(b))]
        assert index.global_files == registered
        assert [x.label for x in index.get(registered[0]).assignments] == ["A"]

    def test_fallback_pattern_outside_root(self, index, workspace):
        """Patterns may reach outside the workspace root."""
        root = workspace / "project"
        root.mkdir()
        shared = write_lua(workspace, "_fallback/Scripts/shared.lua", "Shared = {}\n")

        registered = scan_global_files(index, str(root), ["Scripts/*.lua", "../_fallback/Scripts/*.lua"])

        assert registered == [path_to_uri(str(shared))]

    def test_rescan_does_not_duplicate(self, index, workspace):
        """Scanning twice keeps each global file once."""
        write_lua(workspace, "Scripts/a.lua", "A = 1\n")

        scan_global_files(index, str(workspace), ["Scripts/*.lua"])
        scan_global_files(index, str(workspace), ["Scripts/*.lua", "Scripts/a.lua"])

        assert len(index.global_files) == 1


class TestIndexLock:
    """Test IndexLock."""

    def test_reentrant(self):
        """The owning thread can acquire the lock again."""
        lock = IndexLock()

        with lock:
            with lock:
                assert lock.is_acquired
            assert lock.is_acquired
        assert not lock.is_acquired

    def test_other_thread_blocked(self):
        """Another thread cannot take a held lock."""
        lock = IndexLock()
        outcome = []

        with lock:
            worker = threading.Thread(target=lambda: outcome.append(lock.acquire(timeout=0.05)))
            worker.start()
            worker.join()

        assert outcome == [False]
