"""S3-backed implementation of ObjectStoreRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from image_collection.core.infrastructure.adapters.s3_adapter import S3AdapterProtocol
from image_collection.core.models.errors import StoreError
from image_collection.core.repositories.object_store_repository import ObjectStoreRepository
from image_collection.core.utils.constants import (
    ERROR_CODE_OBJECT_COPY_FAILED,
    ERROR_CODE_OBJECT_DELETE_FAILED,
    ERROR_CODE_OBJECT_HEAD_FAILED,
    ERROR_CODE_OBJECT_PUT_FAILED,
    NOT_FOUND_ERROR_CODES,
)

logger = Logger(UTC=True)


def _is_not_found(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in NOT_FOUND_ERROR_CODES


class S3ObjectStore(ObjectStoreRepository):
    """Object store backed by an S3 bucket.

    All boto3 errors are caught and translated into StoreError.
    """

    def __init__(self, adapter: S3AdapterProtocol) -> None:
        """Create the store over the provided S3 adapter."""
        self._s3 = adapter

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str,
    ) -> None:
        logger.debug("Putting object", extra={"key": key, "size": len(body)})

        try:
            self._s3.put_object(key=key, body=body, content_type=content_type, acl=acl)

        except ClientError as exc:
            logger.error("S3 put failed", extra={"key": key})
            raise StoreError(
                message="Unable to store image object",
                error_code=ERROR_CODE_OBJECT_PUT_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error putting object")
            raise StoreError(
                message="Unable to store image object",
                error_code=ERROR_CODE_OBJECT_PUT_FAILED,
                details={"key": key},
            ) from exc

    def delete_object(self, *, key: str) -> None:
        logger.debug("Deleting object", extra={"key": key})

        try:
            self._s3.delete_object(key=key)

        except ClientError as exc:
            if _is_not_found(exc):
                return

            logger.error("S3 deletion failed", extra={"key": key})
            raise StoreError(
                message="Unable to delete image object",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting object")
            raise StoreError(
                message="Unable to delete image object",
                error_code=ERROR_CODE_OBJECT_DELETE_FAILED,
                details={"key": key},
            ) from exc

    def copy_object(self, *, source_key: str, dest_key: str, acl: str) -> None:
        logger.debug("Copying object", extra={"source_key": source_key, "dest_key": dest_key})

        try:
            self._s3.copy_object(source_key=source_key, dest_key=dest_key, acl=acl)

        except ClientError as exc:
            logger.error(
                "S3 copy failed",
                extra={"source_key": source_key, "dest_key": dest_key},
            )
            raise StoreError(
                message="Unable to copy image object",
                error_code=ERROR_CODE_OBJECT_COPY_FAILED,
                details={"source_key": source_key, "dest_key": dest_key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error copying object")
            raise StoreError(
                message="Unable to copy image object",
                error_code=ERROR_CODE_OBJECT_COPY_FAILED,
                details={"source_key": source_key, "dest_key": dest_key},
            ) from exc

    def head_object(self, *, key: str) -> bool:
        try:
            self._s3.head_object(key=key)
            return True

        except ClientError as exc:
            if _is_not_found(exc):
                return False

            logger.error("S3 head failed", extra={"key": key})
            raise StoreError(
                message="Unable to look up image object",
                error_code=ERROR_CODE_OBJECT_HEAD_FAILED,
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error looking up object")
            raise StoreError(
                message="Unable to look up image object",
                error_code=ERROR_CODE_OBJECT_HEAD_FAILED,
                details={"key": key},
            ) from exc
