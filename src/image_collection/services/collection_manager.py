"""Business logic for an entity's ordered image collection.

Each image occupies a slot ``0..count-1`` and is stored once per configured
variant under ``<prefix>/<identifier>/<variant>[_<index>].webp``. The count
persisted on the owning record is the only source of truth for how many
slots exist; it is re-read at the start of every operation.
"""

from collections.abc import Callable, Iterable, MutableMapping
from typing import Any

from aws_lambda_powertools import Logger

from image_collection.core.config import Configuration, get_configuration
from image_collection.core.infrastructure.adapters.s3_adapter import S3Adapter
from image_collection.core.infrastructure.aws.s3_object_store import S3ObjectStore
from image_collection.core.infrastructure.imaging.webp_encoder import Encoder, WebPEncoder
from image_collection.core.models.errors import (
    EncodeError,
    IdentityError,
    ImageCollectionError,
    OperationFailedError,
    ValidationError,
)
from image_collection.core.models.result import OperationResult
from image_collection.core.models.upload import UploadedFileProtocol
from image_collection.core.records.count_store import CountStore, resolve_count_store
from image_collection.core.records.mapping_record import MappingRecord
from image_collection.core.repositories.object_store_repository import ObjectStoreRepository
from image_collection.core.repositories.record_repository import ImageRecord
from image_collection.core.utils.constants import (
    ERROR_CODE_INDEX_OUT_OF_RANGE,
    ERROR_CODE_INVALID_IMAGE,
    ID_ATTRIBUTE,
    VARIANT_ORIGINAL,
    WEBP_CONTENT_TYPE,
    WEBP_EXTENSION,
)
from image_collection.core.utils.mime import is_image_content_type

logger = Logger(UTC=True)


class CollectionManager:
    """Keeps one entity's image objects and its stored count in step.

    Mutating operations come in two forms. ``try_upload`` and friends
    return an :class:`OperationResult` carrying either the value or the
    error. ``upload`` and friends return the bare value, or ``None`` /
    ``False`` on failure. Neither form raises collaborator failures;
    they are logged instead.

    There is no locking: two managers writing the same identifier at the
    same time can lose count updates or clobber each other's renumbering.
    """

    def __init__(
        self,
        record: ImageRecord | MutableMapping[str, Any] | str,
        identifier: str | None = None,
        *,
        config: Configuration | None = None,
        store: ObjectStoreRepository | None = None,
        encoder: Encoder | None = None,
    ) -> None:
        """Bind the manager to a record, or to a bare identifier string.

        Raises:
            ConfigError: If a required configuration field is missing
            IdentityError: If the identifier resolves to a blank value
        """
        self.config = config or get_configuration()
        self.config.validate_required()

        self.record: ImageRecord | None = self._coerce_record(record)
        if identifier is None:
            identifier = record if isinstance(record, str) else self._extract_identifier()
        if identifier is None or not str(identifier).strip():
            raise IdentityError(details={"record": repr(self.record)})

        self.identifier = str(identifier)
        self._store = store
        self._encoder: Encoder = encoder or WebPEncoder()

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def upload(self, file: UploadedFileProtocol) -> int | None:
        """Append an image as a new slot and return its index."""
        return self.try_upload(file).value

    def try_upload(self, file: UploadedFileProtocol) -> OperationResult[int]:
        if not self._valid_image(file):
            return self._reject_file("upload", file)

        def run() -> int:
            index = self.count()
            self._upload_variants(file.read(), index)
            self._write_count(index + 1)
            logger.info(
                "Image uploaded",
                extra={"identifier": self.identifier, "index": index},
            )
            return index

        return self._run("Upload failed", run)

    def upload_all(self, files: Iterable[UploadedFileProtocol]) -> list[int]:
        """Upload each file in order; failed uploads are left out of the result."""
        indices: list[int] = []
        for file in files:
            index = self.upload(file)
            if index is not None:
                indices.append(index)
        return indices

    def replace(self, index: int, file: UploadedFileProtocol) -> int | None:
        """Overwrite the image in an existing slot."""
        return self.try_replace(index, file).value

    def try_replace(self, index: int, file: UploadedFileProtocol) -> OperationResult[int]:
        if not self._valid_image(file):
            return self._reject_file("replace", file)

        def run() -> int | OperationResult[int]:
            count = self.count()
            if not 0 <= index < count:
                return self._reject_index("replace", index, count)

            self._delete_variants(index)
            self._upload_variants(file.read(), index)
            logger.info(
                "Image replaced",
                extra={"identifier": self.identifier, "index": index},
            )
            return index

        return self._run("Replace failed", run)

    def delete(self, index: int) -> bool:
        """Remove a slot and shift every later slot down by one."""
        return bool(self.try_delete(index).value)

    def try_delete(self, index: int) -> OperationResult[bool]:
        def run() -> bool | OperationResult[bool]:
            count = self.count()
            if not 0 <= index < count:
                return self._reject_index("delete", index, count, value=False)

            self._delete_variants(index)
            self._reindex_after_delete(index)
            logger.info(
                "Image deleted",
                extra={"identifier": self.identifier, "index": index},
            )
            return True

        return self._run("Delete failed", run, failed=False)

    def delete_all(self) -> bool:
        """Remove every slot and reset the count to zero."""
        return bool(self.try_delete_all().value)

    def try_delete_all(self) -> OperationResult[bool]:
        def run() -> bool:
            count = self.count()
            for index in range(count):
                self._delete_variants(index)
            self._write_count(0)
            logger.info(
                "All images deleted",
                extra={"identifier": self.identifier, "count": count},
            )
            return True

        return self._run("Delete all failed", run, failed=False)

    def url(self, variant: str = VARIANT_ORIGINAL, index: int = 0) -> str:
        """Public URL of a variant; computed locally without contacting the store."""
        return f"{self.config.base_url}/{self.identifier}/{self.key_suffix(variant, index)}"

    def urls(self, variant: str = VARIANT_ORIGINAL) -> list[str]:
        return [self.url(variant, index) for index in range(self.count())]

    def exists(self, index: int = 0) -> bool:
        """Whether the original variant of a slot is present in the store.

        Raises:
            StoreError: For store failures other than "not found"
        """
        return self.store.head_object(key=self.key(VARIANT_ORIGINAL, index))

    def count(self) -> int:
        return self._count_store().get_count()

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def key(self, variant: str, index: int) -> str:
        suffix = self.key_suffix(variant, index)
        if self.config.prefix:
            return f"{self.config.prefix}/{self.identifier}/{suffix}"
        return f"{self.identifier}/{suffix}"

    @staticmethod
    def key_suffix(variant: str, index: int) -> str:
        suffix = "" if index == 0 else f"_{index}"
        return f"{variant}{suffix}.{WEBP_EXTENSION}"

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def store(self) -> ObjectStoreRepository:
        if self._store is None:
            self._store = S3ObjectStore(S3Adapter(self.config))
        return self._store

    def _count_store(self) -> CountStore:
        return resolve_count_store(self.record, self.config)

    def _write_count(self, count: int) -> None:
        self._count_store().set_count(count)

    # ------------------------------------------------------------------
    # Object sequences
    # ------------------------------------------------------------------

    def _upload_variants(self, source: bytes, index: int) -> None:
        for variant in self.config.variants:
            max_dimension = self.config.max_dimension_for(variant)
            try:
                encoded = self._encoder(source, max_dimension, self.config.webp_quality)
            except EncodeError as exc:
                logger.warning(
                    "WebP conversion failed, skipping variant",
                    extra={"variant": variant, "index": index, "error": exc.message},
                )
                continue
            except Exception:
                logger.exception(
                    "WebP conversion failed, skipping variant",
                    extra={"variant": variant, "index": index},
                )
                continue

            self.store.put_object(
                key=self.key(variant, index),
                body=encoded,
                content_type=WEBP_CONTENT_TYPE,
                acl=self.config.acl,
            )

    def _delete_variants(self, index: int) -> None:
        for variant in self.config.variants:
            self.store.delete_object(key=self.key(variant, index))

    def _reindex_after_delete(self, deleted_index: int) -> None:
        # Ascending, copy before deleting the source: a failure part way
        # leaves a duplicate slot rather than a lost one.
        total = self.count()
        for index in range(deleted_index + 1, total):
            for variant in self.config.variants:
                source_key = self.key(variant, index)
                self.store.copy_object(
                    source_key=source_key,
                    dest_key=self.key(variant, index - 1),
                    acl=self.config.acl,
                )
                self.store.delete_object(key=source_key)
        self._write_count(max(total - 1, 0))

    # ------------------------------------------------------------------
    # Error handling
    # ------------------------------------------------------------------

    def _run(
        self,
        message: str,
        operation: Callable[[], Any],
        *,
        failed: Any = None,
    ) -> OperationResult[Any]:
        try:
            outcome = operation()
        except ImageCollectionError as exc:
            logger.error(
                f"{message}: {exc.message}",
                extra={
                    "identifier": self.identifier,
                    "error_code": exc.error_code,
                    "details": exc.details,
                },
            )
            return OperationResult(value=failed, error=exc)
        except Exception as exc:
            logger.exception(f"{message}: {exc}", extra={"identifier": self.identifier})
            return OperationResult(
                value=failed,
                error=OperationFailedError(
                    message=f"{message}: {exc}",
                    details={"identifier": self.identifier},
                ),
            )

        if isinstance(outcome, OperationResult):
            return outcome
        return OperationResult.success(outcome)

    def _reject_file(self, operation: str, file: Any) -> OperationResult[Any]:
        content_type = getattr(file, "content_type", None)
        logger.warning(
            "Rejected non-image file",
            extra={"operation": operation, "content_type": content_type},
        )
        return OperationResult.failure(
            ValidationError(
                message="File is not an image",
                error_code=ERROR_CODE_INVALID_IMAGE,
                details={"content_type": content_type},
            )
        )

    def _reject_index(
        self,
        operation: str,
        index: int,
        count: int,
        *,
        value: Any = None,
    ) -> OperationResult[Any]:
        logger.warning(
            "Index out of range",
            extra={"operation": operation, "index": index, "count": count},
        )
        return OperationResult(
            value=value,
            error=ValidationError(
                message="Image index out of range",
                error_code=ERROR_CODE_INDEX_OUT_OF_RANGE,
                details={"index": index, "count": count},
            ),
        )

    @staticmethod
    def _valid_image(file: Any) -> bool:
        return is_image_content_type(getattr(file, "content_type", None))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce_record(
        record: ImageRecord | MutableMapping[str, Any] | str,
    ) -> ImageRecord | None:
        if isinstance(record, str):
            return None
        if isinstance(record, ImageRecord):
            return record
        return MappingRecord(record)

    def _extract_identifier(self) -> str | None:
        """Identifier attribute, then the record's param form, then its id."""
        if self.record is None:
            return None

        value = self.record.read_attribute(self.config.identifier_attribute)
        if value:
            return str(value)

        param = self.record.to_param()
        if param:
            return param

        record_id = self.record.read_attribute(ID_ATTRIBUTE)
        return None if record_id is None else str(record_id)
