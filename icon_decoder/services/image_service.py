"""Загрузка ICO с диска и выгрузка декодированных растров.

Принципы:
- SRP: класс отвечает только за ввод-вывод и перекодирование, не за разбор ICO.
- OCP: новые целевые форматы (WebP, ICO) можно добавить отдельными методами.
"""
from __future__ import annotations

import base64
import io
from pathlib import Path

from icon_decoder.models.icon_model import DecodedBitmap
from icon_decoder.services.process_service import ProcessService


class ImageService:
    def __init__(self, process_service: ProcessService | None = None) -> None:
        self._process_service = process_service or ProcessService()

    def load_icon_bytes(self, file_path: str | Path) -> bytes:
        """Читает ICO-файл целиком.

        Args:
            file_path: Путь до файла иконки.

        Returns:
            Содержимое файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")
        return path.read_bytes()

    def to_png_bytes(self, bitmap: DecodedBitmap) -> bytes:
        """Кодирует растр в PNG с альфа-каналом."""
        out = io.BytesIO()
        self._process_service.to_pil_image(bitmap).save(out, format="PNG")
        return out.getvalue()

    def to_data_uri(self, bitmap: DecodedBitmap) -> str:
        """Возвращает `data:image/png;base64,...` для встраивания в HTML-страницу."""
        encoded = base64.b64encode(self.to_png_bytes(bitmap)).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def save_png(self, bitmap: DecodedBitmap, file_path: str | Path) -> Path:
        path = Path(file_path)
        path.write_bytes(self.to_png_bytes(bitmap))
        return path
