"""
WebPEncoder - Re-encodes uploaded images as size-bounded WebP.
"""

import io
from collections.abc import Callable

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from image_collection.core.models.errors import EncodeError

logger = Logger(UTC=True)

# (source bytes, max dimension, quality) -> encoded bytes
Encoder = Callable[[bytes, int, int], bytes]


class WebPEncoder:
    """
    Converts any Pillow-readable image into WebP.

    The image is shrunk so its longest side fits ``max_dimension``;
    images already within bounds keep their size.
    """

    def __call__(self, source: bytes, max_dimension: int, quality: int) -> bytes:
        return self.encode(source, max_dimension, quality)

    def encode(self, source: bytes, max_dimension: int, quality: int) -> bytes:
        """
        Encode image data as WebP.

        Args:
            source: Original image as bytes
            max_dimension: Upper bound for width and height
            quality: WebP quality (1-100)

        Returns:
            Encoded WebP bytes

        Raises:
            EncodeError: If the source cannot be decoded or encoded
        """
        try:
            img = Image.open(io.BytesIO(source))
            img = self._convert_color_mode(img)
            # thumbnail() keeps aspect ratio and never enlarges
            img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

            output = io.BytesIO()
            img.save(output, format="WEBP", quality=quality)
            return output.getvalue()

        except UnidentifiedImageError as exc:
            logger.error("Unrecognised image data", extra={"size": len(source)})
            raise EncodeError(
                message="Image format not recognised",
                details={"max_dimension": max_dimension},
            ) from exc

        except Exception as exc:
            logger.error(f"Error encoding WebP: {exc}")
            raise EncodeError(
                message="Unable to encode image as WebP",
                details={"max_dimension": max_dimension},
            ) from exc

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert to a mode WebP can store, keeping transparency."""
        if img.mode in ("RGB", "RGBA"):
            return img
        if img.mode in ("LA", "P", "PA") or "transparency" in img.info:
            return img.convert("RGBA")
        return img.convert("RGB")


def encode_webp(source: bytes, max_dimension: int, quality: int) -> bytes:
    """Module-level form of :meth:`WebPEncoder.encode`."""
    return WebPEncoder().encode(source, max_dimension, quality)
