"""Декодирование данных записи ICO в RGBA-растр.

Принципы:
- SRP: `DibReconstructor` разбирает устаревший DIB, `PngDecoder` делегирует PNG библиотеке Pillow.
- Входные байты не изменяются: исправленная высота вычисляется в локальную переменную.
"""
from __future__ import annotations

import io
import logging
import struct

import numpy as np
from PIL import Image, UnidentifiedImageError

from icon_decoder.models.errors import (
    InvalidDibHeaderError,
    UnsupportedDibFormatError,
    UnsupportedPngPayloadError,
)
from icon_decoder.models.icon_model import DecodedBitmap

logger = logging.getLogger(__name__)

# biSize, biWidth, biHeight
DIB_PREFIX = struct.Struct("<Iii")
# biPlanes, biBitCount, biCompression
DIB_FORMAT = struct.Struct("<HHI")

BITMAPINFOHEADER_SIZE = 40
BI_RGB = 0


class DibReconstructor:
    def __init__(self, max_dimension: int = 4096) -> None:
        self._max_dimension = max_dimension

    def decode_dib(self, raw: bytes) -> DecodedBitmap:
        """Собирает RGBA-растр из 32-битного DIB, встроенного в ICO.

        В ICO высота в заголовке удвоена (учитывает AND-маску прозрачности),
        строки хранятся снизу вверх, а каналы в порядке B, G, R, A.

        Args:
            raw: Данные записи: BITMAPINFOHEADER, затем пиксели и маска.

        Returns:
            `DecodedBitmap` с пикселями сверху вниз в порядке R, G, B, A.

        Raises:
            InvalidDibHeaderError: размеры или размер заголовка бессмысленны.
            UnsupportedDibFormatError: палитра, сжатие или глубина, отличная от 32 бит.
        """
        if len(raw) < DIB_PREFIX.size:
            raise InvalidDibHeaderError(f"Заголовок DIB обрезан: {len(raw)} байт")

        header_size, width, bi_height = DIB_PREFIX.unpack_from(raw, 0)
        actual_height = bi_height // 2

        if header_size < DIB_PREFIX.size or header_size > len(raw):
            raise InvalidDibHeaderError(
                f"Недопустимый размер заголовка DIB: {header_size} (данных {len(raw)} байт)"
            )
        # BITMAPCOREHEADER stores 16-bit dimensions; nothing below applies to it
        if header_size < BITMAPINFOHEADER_SIZE:
            raise UnsupportedDibFormatError(f"Заголовок DIB размером {header_size} не поддерживается")
        if width <= 0 or actual_height <= 0:
            raise InvalidDibHeaderError(f"Недопустимые размеры DIB: {width}x{actual_height}")
        if width > self._max_dimension or actual_height > self._max_dimension:
            raise InvalidDibHeaderError(
                f"Размеры DIB {width}x{actual_height} превышают предел {self._max_dimension}"
            )

        _planes, bit_count, compression = DIB_FORMAT.unpack_from(raw, 12)
        if bit_count != 32 or compression != BI_RGB:
            raise UnsupportedDibFormatError(
                f"Поддерживается только 32 бит без сжатия, получено {bit_count} бит, сжатие {compression}"
            )

        expected = width * actual_height * 4
        available = min(expected, len(raw) - header_size)
        if available < expected:
            logger.warning(
                "Пиксельных данных DIB не хватает %d байт, остаток заполнен нулями", expected - available
            )

        bottom_up = np.zeros(expected, dtype=np.uint8)
        if available > 0:
            bottom_up[:available] = np.frombuffer(raw, dtype=np.uint8, count=available, offset=header_size)

        rows = bottom_up.reshape(actual_height, width, 4)
        # flip vertically, BGRA -> RGBA
        rgba = rows[::-1, :, [2, 1, 0, 3]]
        return DecodedBitmap(width=width, height=actual_height, pixels=rgba.tobytes())


class PngDecoder:
    def __init__(self, max_dimension: int = 4096) -> None:
        self._max_dimension = max_dimension

    def decode_png(self, raw: bytes) -> DecodedBitmap:
        """Декодирует PNG средствами Pillow и приводит к RGBA.

        Размеры из IHDR проверяются до распаковки пикселей.

        Raises:
            UnsupportedPngPayloadError: Pillow не распознал или не смог дочитать данные,
                либо размеры превышают предел.
        """
        try:
            with Image.open(io.BytesIO(raw)) as img:
                if img.format != "PNG":
                    raise UnsupportedPngPayloadError(f"Ожидался PNG, получено: {img.format}")
                width, height = img.size
                if width > self._max_dimension or height > self._max_dimension:
                    raise UnsupportedPngPayloadError(
                        f"Размеры PNG {width}x{height} превышают предел {self._max_dimension}"
                    )
                rgba = img.convert("RGBA")
        except UnsupportedPngPayloadError:
            raise
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise UnsupportedPngPayloadError(f"Не удалось декодировать PNG: {exc}") from exc

        return DecodedBitmap(width=width, height=height, pixels=rgba.tobytes())
