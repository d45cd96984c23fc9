"""Tests for the flat-directory disk store."""

import logging
import os

import pytest

from thumbcache.cache.disk import DiskStore
from thumbcache.cache.keys import derive_key
from thumbcache.errors.exceptions import StoreError


class TestDiskStore:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        DiskStore(target)
        assert target.is_dir()

    def test_write_creates_file_named_by_key(self, tmp_path):
        store = DiskStore(tmp_path)
        key = derive_key("http://x/a.jpg")
        path = store.write(key, b"raw bytes")
        assert path == tmp_path / key
        assert path.read_bytes() == b"raw bytes"

    def test_write_overwrites(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"first")
        store.write("k1", b"second")
        assert (tmp_path / "k1").read_bytes() == b"second"
        assert store.entry_count == 1

    def test_write_leaves_no_partial_file(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"data")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k1"]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX non-root")
    def test_write_failure_raises_store_error(self, tmp_path):
        store = DiskStore(tmp_path / "ro")
        (tmp_path / "ro").chmod(0o500)
        try:
            with pytest.raises(StoreError) as exc_info:
                store.write("k1", b"data")
            assert exc_info.value.key == "k1"
        finally:
            (tmp_path / "ro").chmod(0o700)

    def test_write_into_missing_directory_raises_store_error(self, tmp_path):
        store = DiskStore(tmp_path / "gone")
        (tmp_path / "gone").rmdir()
        with pytest.raises(StoreError):
            store.write("k1", b"data")

    def test_load_all_yields_every_file(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"one")
        store.write("k2", b"two")
        assert dict(store.load_all()) == {"k1": b"one", "k2": b"two"}

    def test_load_all_skips_directories_and_partials(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"one")
        (tmp_path / "subdir").mkdir()
        (tmp_path / "k2.part").write_bytes(b"half")
        assert dict(store.load_all()) == {"k1": b"one"}

    def test_load_all_is_restartable(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"one")
        assert list(store.load_all()) == list(store.load_all())

    def test_load_all_is_lazy(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"one")
        gen = store.load_all()
        store.write("k2", b"two")
        # Listing happens on first iteration, not on call.
        assert dict(gen) == {"k1": b"one", "k2": b"two"}

    def test_load_all_empty(self, tmp_path):
        assert list(DiskStore(tmp_path).load_all()) == []

    def test_size_mb(self, tmp_path):
        store = DiskStore(tmp_path)
        store.write("k1", b"x" * 2048)
        assert store.size_mb > 0

    def test_persistence(self, tmp_path):
        DiskStore(tmp_path).write("k1", b"persistent data")
        reopened = DiskStore(tmp_path)
        assert dict(reopened.load_all()) == {"k1": b"persistent data"}

    def test_load_all_logs_foreign_file_names(self, tmp_path, caplog):
        store = DiskStore(tmp_path)
        key = derive_key("http://x/a.jpg")
        store.write(key, b"one")
        (tmp_path / "notes.txt").write_bytes(b"two")

        with caplog.at_level(logging.DEBUG, logger="thumbcache.cache.disk"):
            loaded = dict(store.load_all())

        # Foreign names are still yielded; only logged.
        assert loaded == {key: b"one", "notes.txt": b"two"}
        assert "notes.txt" in caplog.text
        assert key not in caplog.text

    def test_counts_survive_missing_directory(self, tmp_path):
        store = DiskStore(tmp_path / "gone")
        (tmp_path / "gone").rmdir()
        assert store.entry_count == 0
        assert store.size_mb == 0.0
        assert list(store.load_all()) == []
