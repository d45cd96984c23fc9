import io

import httpx
import pytest
from PIL import Image


def _encode(fmt: str, size: tuple[int, int], color: str) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    """Small valid PNG (4x3, red)."""
    return _encode("PNG", (4, 3), "red")


@pytest.fixture
def jpeg_bytes():
    """Small valid JPEG (8x6, blue)."""
    return _encode("JPEG", (8, 6), "blue")


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def make_transport():
    """Build an httpx.MockTransport from a ``{url: bytes | int}`` map.

    Bytes are served with 200; an int is returned as a bare status code.
    Unknown URLs get 404. Every request URL is appended to ``transport.calls``.
    """

    def _make(routes: dict[str, bytes | int]) -> httpx.MockTransport:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            calls.append(url)
            body = routes.get(url, 404)
            if isinstance(body, int):
                return httpx.Response(body)
            return httpx.Response(200, content=body, headers={"Content-Type": "image/png"})

        transport = httpx.MockTransport(handler)
        transport.calls = calls
        return transport

    return _make
