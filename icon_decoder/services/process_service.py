from __future__ import annotations

from PIL import Image

from icon_decoder.models.errors import InvalidTargetSizeError
from icon_decoder.models.icon_model import DecodedBitmap


class ProcessService:
    def to_pil_image(self, bitmap: DecodedBitmap) -> Image.Image:
        """
        Оборачивает RGBA-растр в `PIL.Image.Image` (копия пикселей).
        """
        return Image.frombytes("RGBA", (bitmap.width, bitmap.height), bitmap.pixels)

    def from_pil_image(self, image: Image.Image) -> DecodedBitmap:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        width, height = image.size
        return DecodedBitmap(width=width, height=height, pixels=image.tobytes())

    def resample(self, bitmap: DecodedBitmap, target_size: int) -> DecodedBitmap:
        """
        Бикубическое масштабирование в квадрат target_size x target_size.
        Пропорции не сохраняются: исходник растягивается на весь квадрат.
        """
        if target_size <= 0:
            raise InvalidTargetSizeError(f"Недопустимый размер: {target_size}")
        if bitmap.size == (target_size, target_size):
            return DecodedBitmap(width=target_size, height=target_size, pixels=bytes(bitmap.pixels))

        scaled = self.to_pil_image(bitmap).resize(
            (target_size, target_size), resample=Image.Resampling.BICUBIC
        )
        return self.from_pil_image(scaled)
