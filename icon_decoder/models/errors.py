"""Исключения разбора и декодирования иконок.

Все ошибки наследуют `IconDecodeError`, который сам является `ValueError`:
вызывающая сторона может ловить одну базовую ошибку и подставлять запасное изображение.
"""
from __future__ import annotations


class IconDecodeError(ValueError):
    """Базовая ошибка: данные иконки не удалось превратить в растр."""


class MalformedContainerError(IconDecodeError):
    """Повреждён заголовок, число записей или границы записей каталога."""


class TruncatedPayloadError(IconDecodeError):
    """Данные записи выходят за пределы буфера."""


class UnsupportedDibFormatError(IconDecodeError):
    """DIB с палитрой, сжатием или глубиной цвета, отличной от 32 бит."""


class InvalidDibHeaderError(IconDecodeError):
    """Бессмысленные размеры или размер заголовка DIB."""


class UnsupportedPngPayloadError(IconDecodeError):
    """Декодер PNG не смог прочитать данные записи."""


class InvalidTargetSizeError(IconDecodeError):
    """Запрошен нулевой или отрицательный размер."""
