"""Контроллер декодирования: оркестрация сервисов разбора, выбора и декодирования.

SOLID:
- SRP: класс только связывает шаги конвейера, без логики формата.
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Ошибка любого шага пробрасывается как есть; частичное восстановление не выполняется.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from icon_decoder.config.settings import Settings, default_settings
from icon_decoder.models.errors import InvalidTargetSizeError
from icon_decoder.models.icon_model import DecodedBitmap, DirectoryEntry, PngPayload
from icon_decoder.services.decode_service import DibReconstructor, PngDecoder
from icon_decoder.services.directory_service import DirectoryParser, EntrySelector
from icon_decoder.services.payload_service import PayloadExtractor
from icon_decoder.services.process_service import ProcessService

logger = logging.getLogger(__name__)


@dataclass
class IconController:
    """Выбирает и декодирует изображение из ICO-контейнера.

    Ответственности:
    - Разбор каталога через `DirectoryParser` и выбор записи через `EntrySelector`.
    - Извлечение данных через `PayloadExtractor`.
    - Декодирование PNG (`PngDecoder`) или DIB (`DibReconstructor`).
    - Необязательное масштабирование через `ProcessService`.
    """
    settings: Settings = field(default_factory=default_settings)

    _parser: DirectoryParser = field(default_factory=DirectoryParser)
    _selector: EntrySelector = field(default_factory=EntrySelector)
    _extractor: PayloadExtractor = field(default_factory=PayloadExtractor)
    _process_service: ProcessService = field(default_factory=ProcessService)
    _dib_reconstructor: Optional[DibReconstructor] = None
    _png_decoder: Optional[PngDecoder] = None

    def __post_init__(self) -> None:
        if self._png_decoder is None:
            self._png_decoder = PngDecoder(max_dimension=self.settings.max_dib_dimension)
        if self._dib_reconstructor is None:
            self._dib_reconstructor = DibReconstructor(max_dimension=self.settings.max_dib_dimension)

    def list_entries(self, buffer: bytes) -> List[DirectoryEntry]:
        return self._parser.parse(buffer)

    def get_icon_by_size(
        self,
        buffer: bytes,
        target_size: Optional[int] = None,
        scale_to_target: Optional[bool] = None,
    ) -> DecodedBitmap:
        """Возвращает растр записи, лучше всего подходящей под `target_size`.

        Args:
            buffer: Содержимое ICO-файла.
            target_size: Желаемый размер стороны, px. По умолчанию из настроек.
            scale_to_target: Масштабировать результат точно до `target_size`.
                Без него растр возвращается в родном размере записи.

        Raises:
            InvalidTargetSizeError: размер не положительное целое.
            IconDecodeError: любая ошибка разбора или декодирования.
        """
        if target_size is None:
            target_size = self.settings.default_target_size
        if scale_to_target is None:
            scale_to_target = self.settings.scale_to_target
        if isinstance(target_size, bool) or not isinstance(target_size, int) or target_size <= 0:
            raise InvalidTargetSizeError(f"Недопустимый размер: {target_size!r}")

        entries = self._parser.parse(buffer)
        entry = self._selector.select(entries, target_size)
        payload = self._extractor.extract(buffer, entry)

        if isinstance(payload, PngPayload):
            bitmap = self._png_decoder.decode_png(payload.data)
        else:
            bitmap = self._dib_reconstructor.decode_dib(payload.data)
        logger.debug("Запись #%d (%s) декодирована в %dx%d", entry.index, payload.kind, bitmap.width, bitmap.height)

        if scale_to_target:
            return self._process_service.resample(bitmap, target_size)
        return bitmap


def get_icon_by_size(buffer: bytes, target_size: int, scale_to_target: bool = False) -> DecodedBitmap:
    """Shortcut for `IconController().get_icon_by_size(...)` with built-in defaults; the environment is not read."""
    return IconController().get_icon_by_size(buffer, target_size, scale_to_target)
