"""Tests for cache key derivation."""

import hashlib

from thumbcache.cache.keys import derive_key, is_cache_key


class TestDeriveKey:
    def test_deterministic(self):
        url = "http://x/a.jpg"
        assert derive_key(url) == derive_key(url)

    def test_different_urls_different_keys(self):
        assert derive_key("http://x/a.jpg") != derive_key("http://x/b.jpg")
        assert derive_key("http://x/a.jpg") != derive_key("https://x/a.jpg")

    def test_returns_hex_string(self):
        k = derive_key("http://x/a.jpg")
        assert len(k) == 64  # SHA256 hex digest
        assert all(c in "0123456789abcdef" for c in k)

    def test_matches_sha256_of_utf8(self):
        url = "https://example.com/photo-é.png"
        assert derive_key(url) == hashlib.sha256(url.encode("utf-8")).hexdigest()

    def test_empty_url_is_valid(self):
        k = derive_key("")
        assert len(k) == 64
        assert is_cache_key(k)

    def test_safe_as_filename(self):
        k = derive_key("http://x/../../etc/passwd")
        assert "/" not in k
        assert "\\" not in k
        assert "." not in k

    def test_many_urls_unique(self):
        keys = {derive_key(f"http://x/{i}.jpg") for i in range(1000)}
        assert len(keys) == 1000


class TestIsCacheKey:
    def test_accepts_derived_key(self):
        assert is_cache_key(derive_key("http://x/a.jpg"))

    def test_rejects_other_names(self):
        assert not is_cache_key("notes.txt")
        assert not is_cache_key("A" * 64)
        assert not is_cache_key(derive_key("u") + ".part")
