from __future__ import annotations

from icon_decoder.models.errors import TruncatedPayloadError
from icon_decoder.models.icon_model import PNG_SIGNATURE, DibPayload, DirectoryEntry, PngPayload, RawPayload


class PayloadExtractor:
    def extract(self, buffer: bytes, entry: DirectoryEntry) -> RawPayload:
        """
        Вырезает данные записи из буфера и определяет их формат по сигнатуре PNG.
        Всё, что не начинается с сигнатуры PNG, считается DIB.
        """
        start = entry.byte_offset
        end = start + entry.byte_size
        if start < 0 or entry.byte_size < 0 or end > len(buffer):
            raise TruncatedPayloadError(
                f"Данные записи {entry.index} [{start}, {end}) выходят за конец буфера ({len(buffer)} байт)"
            )

        data = bytes(buffer[start:end])
        if data[: len(PNG_SIGNATURE)] == PNG_SIGNATURE:
            return PngPayload(data)
        return DibPayload(data)
