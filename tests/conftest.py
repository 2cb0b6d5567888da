from __future__ import annotations

import io
import struct
from typing import Iterable, List, Sequence, Tuple

import pytest
from PIL import Image

from icon_decoder.config.settings import Settings, get_settings

Pixel = Tuple[int, int, int, int]


def build_ico(images: Sequence[Tuple[int, int, bytes]], reserved: int = 0, kind: int = 1) -> bytes:
    """ICO из (ширина, высота, данные); 256 записывается как 0."""
    header = struct.pack("<HHH", reserved, kind, len(images))
    offset = 6 + 16 * len(images)
    directory = b""
    blobs = b""
    for w, h, data in images:
        directory += struct.pack("<BBBBHHII", w % 256, h % 256, 0, 0, 1, 32, len(data), offset)
        blobs += data
        offset += len(data)
    return header + directory + blobs


def build_dib(
    width: int,
    rows_bottom_up: Iterable[Iterable[Pixel]] = (),
    *,
    height: int | None = None,
    header_size: int = 40,
    bit_count: int = 32,
    compression: int = 0,
    bi_height: int | None = None,
    pixel_bytes: bytes | None = None,
) -> bytes:
    """32-битный DIB как в ICO: высота удвоена, строки снизу вверх, пиксели BGRA.

    Пиксели задаются в RGBA, порядок строк: первая строка - нижняя.
    """
    rows: List[List[Pixel]] = [list(r) for r in rows_bottom_up]
    if height is None:
        height = len(rows)
    if bi_height is None:
        bi_height = height * 2
    header = struct.pack("<IiiHHIIiiII", header_size, width, bi_height, 1, bit_count, compression, 0, 0, 0, 0, 0)
    header = header[:header_size] + b"\x00" * max(0, header_size - len(header))
    if pixel_bytes is None:
        pixel_bytes = b"".join(bytes((b, g, r, a)) for row in rows for (r, g, b, a) in row)
        # AND mask, one bit per pixel, rows padded to 4 bytes
        pixel_bytes += b"\x00" * (((width + 31) // 32) * 4 * height)
    return header + pixel_bytes


def build_png(width: int, height: int, color: Pixel = (255, 0, 0, 255)) -> bytes:
    out = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(out, format="PNG")
    return out.getvalue()


def solid_dib(size: int, color: Pixel = (0, 128, 255, 255)) -> bytes:
    return build_dib(size, [[color] * size for _ in range(size)])


def pixel_at(pixels: bytes, width: int, x: int, y: int) -> Pixel:
    i = (y * width + x) * 4
    return tuple(pixels[i:i + 4])  # type: ignore[return-value]


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("DEFAULT_TARGET_SIZE", "SCALE_TO_TARGET", "MAX_DIB_DIMENSION", "LOG_LEVEL"):
        monkeypatch.delenv(f"ICON_DECODER_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def mixed_ico() -> bytes:
    """16x16 DIB, 32x32 DIB, 64x64 PNG."""
    return build_ico(
        [
            (16, 16, solid_dib(16, (10, 20, 30, 255))),
            (32, 32, solid_dib(32, (40, 50, 60, 255))),
            (64, 64, build_png(64, 64, (70, 80, 90, 255))),
        ]
    )
