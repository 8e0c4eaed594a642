"""Uploaded file input accepted by collection operations."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from image_collection.core.utils.mime import detect_mime_type


@runtime_checkable
class UploadedFileProtocol(Protocol):
    """Anything exposing a declared content type and its bytes."""

    content_type: str | None

    def read(self) -> bytes: ...


class UploadedFile(BaseModel):
    """An uploaded image held in memory or in a temporary file."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    content_type: str | None = Field(None, description="Declared MIME type (e.g. image/png)")
    filename: str | None = Field(None, description="Original client file name")
    data: bytes | None = Field(None, description="In-memory file content")
    path: Path | None = Field(None, description="Temporary file holding the content")

    @model_validator(mode="after")
    def check_source(self) -> "UploadedFile":
        if self.data is None and self.path is None:
            raise ValueError("either data or path must be provided")
        return self

    def read(self) -> bytes:
        if self.data is not None:
            return self.data
        return self.path.read_bytes()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        *,
        content_type: str | None = None,
        filename: str | None = None,
    ) -> "UploadedFile":
        return cls(
            content_type=content_type or _sniff(data),
            filename=filename,
            data=data,
        )

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        content_type: str | None = None,
    ) -> "UploadedFile":
        path = Path(path)
        if content_type is None:
            with path.open("rb") as fh:
                content_type = _sniff(fh.read(16))
        return cls(content_type=content_type, filename=path.name, path=path)


def _sniff(head: bytes) -> str | None:
    try:
        return detect_mime_type(head)
    except ValueError:
        return None
