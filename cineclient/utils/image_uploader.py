"""
Image encoding for avatar uploads.

Accepts either a Pillow image or raw bytes from a capture source and
produces JPEG bytes ready for multipart upload.
"""

import io
from typing import Union

from PIL import Image

ImageSource = Union[Image.Image, bytes]


class ImageUploader:
    def __init__(self, quality: int = 80) -> None:
        self.quality = quality

    def to_jpeg_bytes(self, image: ImageSource) -> bytes:
        if isinstance(image, (bytes, bytearray)):
            image = Image.open(io.BytesIO(image))

        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, format="JPEG", quality=self.quality)
        return buffer.getvalue()
