"""Disk + memory tiers working together across a simulated restart."""

from thumbcache.cache.disk import DiskStore
from thumbcache.cache.keys import derive_key
from thumbcache.cache.memory import MemoryIndex
from thumbcache.utils.image import decode_image


class TestTwoTierRestart:
    def test_hydration_restores_written_images(self, tmp_path, png_bytes):
        url = "http://x/a.png"
        DiskStore(tmp_path).write(derive_key(url), png_bytes)

        index = MemoryIndex()
        index.hydrate(DiskStore(tmp_path).load_all(), decode_image)

        img = index.get(derive_key(url))
        assert img is not None
        assert img.size == (4, 3)

    def test_corrupt_file_does_not_abort_hydration(self, tmp_path, png_bytes):
        store = DiskStore(tmp_path)
        store.write(derive_key("http://x/bad"), b"\x89PNG truncated")
        store.write(derive_key("http://x/good"), png_bytes)

        index = MemoryIndex()
        assert index.hydrate(store.load_all(), decode_image) == 1
        assert index.contains(derive_key("http://x/good"))
        assert not index.contains(derive_key("http://x/bad"))
