"""Точка входа: консольная утилита для просмотра и выгрузки иконок из ICO."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from icon_decoder.config.settings import get_settings
from icon_decoder.controllers.icon_controller import IconController
from icon_decoder.models.errors import IconDecodeError
from icon_decoder.services.image_service import ImageService


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    ap = argparse.ArgumentParser(
        prog="icon-decoder",
        description="Выбор и декодирование изображения из ICO-файла",
    )
    ap.add_argument("path", help="путь к .ico")
    ap.add_argument("--size", type=int, default=settings.default_target_size, help="желаемый размер, px")
    ap.add_argument(
        "--scale",
        action=argparse.BooleanOptionalAction,
        default=settings.scale_to_target,
        help="масштабировать ровно до --size",
    )
    ap.add_argument("--list", action="store_true", help="только вывести каталог записей")
    ap.add_argument("--output", "-o", help="сохранить результат как PNG")
    ap.add_argument("--data-uri", action="store_true", help="вывести data:image/png;base64,...")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, декодирует иконку и возвращает код выхода."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    image_service = ImageService()
    controller = IconController(settings=settings)
    try:
        buffer = image_service.load_icon_bytes(args.path)
        if args.list:
            for e in controller.list_entries(buffer):
                print(f"#{e.index}\t{e.width}x{e.height}\t{e.bit_count} bpp\t{e.byte_size} B @ {e.byte_offset}")
            return 0

        bitmap = controller.get_icon_by_size(buffer, args.size, args.scale)
        if args.output:
            out = image_service.save_png(bitmap, args.output)
            print(f"{bitmap.width}x{bitmap.height} -> {out}")
        elif args.data_uri:
            print(image_service.to_data_uri(bitmap))
        else:
            print(f"{bitmap.width}x{bitmap.height}")
    except (IconDecodeError, OSError) as exc:
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
