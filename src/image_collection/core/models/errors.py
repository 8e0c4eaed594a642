"""Custom exception classes for the image collection library."""

from typing import Any

from image_collection.core.utils.constants import (
    ERROR_CODE_CONFIG_MISSING_FIELD,
    ERROR_CODE_ENCODE_FAILED,
    ERROR_CODE_IDENTIFIER_BLANK,
    ERROR_CODE_OPERATION_FAILED,
    ERROR_CODE_RECORD,
    ERROR_CODE_STORE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageCollectionError(Exception):
    """
    Base exception for all image collection errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ConfigError(ImageCollectionError):
    """Raised when a required configuration field is missing."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIG_MISSING_FIELD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class IdentityError(ImageCollectionError):
    """Raised when the collection identifier resolves to a blank value."""

    def __init__(
        self,
        *,
        message: str = "identifier cannot be blank",
        error_code: str = ERROR_CODE_IDENTIFIER_BLANK,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ValidationError(ImageCollectionError):
    """Raised when an operation input is rejected."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreError(ImageCollectionError):
    """Raised when an object store operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class EncodeError(ImageCollectionError):
    """Raised when an image cannot be re-encoded."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_ENCODE_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RecordError(ImageCollectionError):
    """Raised when the external record cannot be read or written."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RECORD,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class OperationFailedError(ImageCollectionError):
    """Wraps an unexpected exception raised during a collection operation."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_OPERATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
