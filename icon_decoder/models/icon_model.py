"""Модели данных для ICO-контейнера и декодированных иконок.

Принципы:
- SRP: только структура данных, без логики разбора и декодирования.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class DirectoryEntry:
    """Запись каталога ICO (ICONDIRENTRY).

    Fields:
        index: Позиция записи в каталоге, используется для разрешения ничьих.
        width: Ширина, px (1..256, ноль в файле означает 256).
        height: Высота, px (то же правило).
        byte_size: Размер данных изображения, байт.
        byte_offset: Смещение данных от начала файла, байт.
        color_count: Число цветов палитры (справочно).
        planes: Плоскости или X-координата горячей точки для CUR (справочно).
        bit_count: Бит на пиксель или Y-координата горячей точки (справочно).
    """
    index: int
    width: int
    height: int
    byte_size: int
    byte_offset: int
    color_count: int = 0
    planes: int = 0
    bit_count: int = 0

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class PngPayload:
    """Данные записи, закодированные как PNG."""
    data: bytes
    kind: Literal["png"] = "png"


@dataclass(frozen=True)
class DibPayload:
    """Данные записи в устаревшем формате DIB (BITMAPINFOHEADER + пиксели + AND-маска)."""
    data: bytes
    kind: Literal["dib"] = "dib"


RawPayload = Union[PngPayload, DibPayload]


@dataclass(frozen=True)
class DecodedBitmap:
    """Неизменяемый декодированный растр.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pixels: RGBA8, построчно сверху вниз, ровно `width * height * 4` байт.
    """
    width: int
    height: int
    pixels: bytes

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height
