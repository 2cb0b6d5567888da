"""Разбор каталога ICO и выбор записи под нужный размер.

Принципы:
- SRP: `DirectoryParser` только читает заголовок и записи, `EntrySelector` только выбирает.
- Чистые функции: входной буфер не изменяется, состояние между вызовами не хранится.
"""
from __future__ import annotations

import logging
import struct
from typing import List, Sequence

from icon_decoder.models.errors import MalformedContainerError
from icon_decoder.models.icon_model import DirectoryEntry

logger = logging.getLogger(__name__)

HEADER = struct.Struct("<HHH")
ENTRY = struct.Struct("<BBBBHHII")

ICON_TYPE = 1
CURSOR_TYPE = 2


class DirectoryParser:
    def parse(self, buffer: bytes) -> List[DirectoryEntry]:
        """Читает ICONDIR и все ICONDIRENTRY из буфера.

        Args:
            buffer: Содержимое ICO-файла целиком.

        Returns:
            Список записей в порядке каталога.

        Raises:
            MalformedContainerError: нет записей, каталог обрезан
                или данные записи выходят за конец буфера.
        """
        total = len(buffer)
        if total < HEADER.size:
            raise MalformedContainerError(f"Буфер слишком короткий для заголовка ICO: {total} байт")

        reserved, kind, count = HEADER.unpack_from(buffer, 0)
        # nonconformant producers exist; only complain
        if reserved != 0:
            logger.warning("Поле reserved в заголовке ICO равно %d, ожидался 0", reserved)
        if kind not in (ICON_TYPE, CURSOR_TYPE):
            logger.warning("Поле type в заголовке ICO равно %d, ожидалось 1 (иконка) или 2 (курсор)", kind)

        if count == 0:
            raise MalformedContainerError("ICO не содержит ни одного изображения")
        directory_end = HEADER.size + ENTRY.size * count
        if total < directory_end:
            raise MalformedContainerError(
                f"Каталог ICO обрезан: {count} записей требуют {directory_end} байт, доступно {total}"
            )

        entries: List[DirectoryEntry] = []
        for i in range(count):
            w, h, colors, _reserved, planes, bits, size, offset = ENTRY.unpack_from(
                buffer, HEADER.size + i * ENTRY.size
            )
            if offset + size > total:
                raise MalformedContainerError(
                    f"Запись {i}: данные [{offset}, {offset + size}) выходят за конец буфера ({total} байт)"
                )
            entries.append(
                DirectoryEntry(
                    index=i,
                    width=w or 256,
                    height=h or 256,
                    byte_size=size,
                    byte_offset=offset,
                    color_count=colors,
                    planes=planes,
                    bit_count=bits,
                )
            )

        logger.debug(
            "Прочитано записей ICO: %d (%s)",
            len(entries),
            ", ".join(f"{e.width}x{e.height}" for e in entries),
        )
        return entries


class EntrySelector:
    def select(self, entries: Sequence[DirectoryEntry], target_size: int) -> DirectoryEntry:
        """Выбирает запись для запрошенного размера.

        Сначала ищется наименьшая по площади запись, не меньшая `target_size`
        по обеим сторонам. Если таких нет, берётся самая большая запись.
        При равной площади побеждает запись, стоящая раньше в каталоге.
        """
        if not entries:
            raise MalformedContainerError("Нет записей для выбора")

        fitting = [e for e in entries if e.width >= target_size and e.height >= target_size]
        if fitting:
            # min/max keep the first of equal keys
            best = min(fitting, key=lambda e: e.area)
        else:
            best = max(entries, key=lambda e: e.area)

        logger.debug(
            "Выбрана запись #%d (%dx%d) для размера %d px",
            best.index,
            best.width,
            best.height,
            target_size,
        )
        return best
