"""Ordered WebP image collections stored in S3."""

from typing import Any

from image_collection.core.config import (
    Configuration,
    configure,
    get_configuration,
    reset_configuration,
)
from image_collection.core.models.errors import (
    ConfigError,
    EncodeError,
    IdentityError,
    ImageCollectionError,
    OperationFailedError,
    RecordError,
    StoreError,
    ValidationError,
)
from image_collection.core.models.result import OperationResult
from image_collection.core.models.upload import UploadedFile
from image_collection.core.records.mapping_record import MappingRecord
from image_collection.core.repositories.record_repository import ImageRecord
from image_collection.services.collection_manager import CollectionManager

__version__ = "1.0.0"
__description__ = "Per-entity ordered WebP image collections on S3 with a synced image count"


def collection_for(
    record: Any,
    identifier: str | None = None,
    **kwargs: Any,
) -> CollectionManager:
    """Build a CollectionManager for a record using the default configuration."""
    return CollectionManager(record, identifier, **kwargs)


__all__ = [
    "CollectionManager",
    "ConfigError",
    "Configuration",
    "EncodeError",
    "IdentityError",
    "ImageCollectionError",
    "ImageRecord",
    "MappingRecord",
    "OperationFailedError",
    "OperationResult",
    "RecordError",
    "StoreError",
    "UploadedFile",
    "ValidationError",
    "collection_for",
    "configure",
    "get_configuration",
    "reset_configuration",
]
