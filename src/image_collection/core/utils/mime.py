from collections.abc import Mapping

from image_collection.core.utils.constants import IMAGE_CONTENT_TYPE_PREFIX

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"BM": "image/bmp",
    b"II*\x00": "image/tiff",
    b"MM\x00*": "image/tiff",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    # RIFF is shared by WAV/AVI; only the WEBP form tag is an image
    if file_data[:4] == b"RIFF" and file_data[8:12] == b"WEBP":
        return "image/webp"

    raise ValueError("Unsupported or unknown file type")


def is_image_content_type(content_type: str | None) -> bool:
    """Return True for any ``image/*`` content type."""
    return bool(content_type) and content_type.lower().startswith(IMAGE_CONTENT_TYPE_PREFIX)
