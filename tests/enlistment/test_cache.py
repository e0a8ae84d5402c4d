"""Tests for cache instance discovery."""

import pytest

from vfstest.enlistment.cache import object_root, pack_root
from vfstest.exceptions import CacheLayoutError


@pytest.fixture
def cache_root(tmp_path):
    root = tmp_path / ".gvfsCache"
    (root / "abc123").mkdir(parents=True)
    (root / "mapping.dat").write_text("mapping")
    return root


@pytest.mark.short
class TestObjectRoot:
    def test_single_instance(self, cache_root):
        assert object_root(cache_root) == cache_root / "abc123" / "gitObjects"

    def test_pack_root(self, cache_root):
        assert pack_root(cache_root) == cache_root / "abc123" / "gitObjects" / "pack"

    def test_accepts_string_path(self, cache_root):
        assert object_root(str(cache_root)) == cache_root / "abc123" / "gitObjects"

    def test_three_entries_fail(self, cache_root):
        (cache_root / "extra.txt").write_text("x")
        with pytest.raises(CacheLayoutError) as excinfo:
            object_root(cache_root)
        assert "Expected local cache root to contain 2 items" in str(excinfo.value)
        assert len(excinfo.value.entries) == 3

    def test_single_entry_fails(self, tmp_path):
        root = tmp_path / "cache"
        (root / "abc123").mkdir(parents=True)
        with pytest.raises(CacheLayoutError):
            object_root(root)

    def test_two_directories_fail(self, tmp_path):
        root = tmp_path / "cache"
        (root / "one").mkdir(parents=True)
        (root / "two").mkdir()
        with pytest.raises(CacheLayoutError) as excinfo:
            object_root(root)
        assert "only one folder" in str(excinfo.value)

    def test_two_files_fail(self, tmp_path):
        root = tmp_path / "cache"
        root.mkdir()
        (root / "a").write_text("a")
        (root / "b").write_text("b")
        with pytest.raises(CacheLayoutError):
            object_root(root)

    def test_missing_root_fails(self, tmp_path):
        with pytest.raises(CacheLayoutError):
            object_root(tmp_path / "missing")

    def test_layout_error_is_an_assertion(self, tmp_path):
        with pytest.raises(AssertionError):
            pack_root(tmp_path / "missing")
