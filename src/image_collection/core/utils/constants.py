"""Global constants used throughout the library.

This module centralizes the key scheme, configuration defaults, error codes
and environment variable names so they can be changed in one place.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Configuration / Identity Errors
ERROR_CODE_CONFIG_MISSING_FIELD = "CONFIG_MISSING_FIELD"
ERROR_CODE_IDENTIFIER_BLANK = "IDENTIFIER_BLANK"

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_IMAGE = "INVALID_IMAGE"
ERROR_CODE_INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

# Storage Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_OBJECT_PUT_FAILED = "OBJECT_PUT_FAILED"
ERROR_CODE_OBJECT_DELETE_FAILED = "OBJECT_DELETE_FAILED"
ERROR_CODE_OBJECT_COPY_FAILED = "OBJECT_COPY_FAILED"
ERROR_CODE_OBJECT_HEAD_FAILED = "OBJECT_HEAD_FAILED"

# Encoding Errors
ERROR_CODE_ENCODE_FAILED = "ENCODE_FAILED"

# Record Errors
ERROR_CODE_RECORD = "RECORD_ERROR"
ERROR_CODE_RECORD_FETCH_FAILED = "RECORD_FETCH_FAILED"
ERROR_CODE_RECORD_UPDATE_FAILED = "RECORD_UPDATE_FAILED"

# Internal / Unexpected
ERROR_CODE_OPERATION_FAILED = "OPERATION_FAILED"

# S3 error codes that mean "no such object"
NOT_FOUND_ERROR_CODES: Final[frozenset[str]] = frozenset({"404", "NoSuchKey", "NotFound"})


# ============================================================================
# Key Scheme
# ============================================================================

WEBP_CONTENT_TYPE = "image/webp"
WEBP_EXTENSION = "webp"
IMAGE_CONTENT_TYPE_PREFIX = "image/"

VARIANT_ORIGINAL = "original"
VARIANT_THUMBNAIL = "thumbnail"


# ============================================================================
# Configuration Defaults
# ============================================================================

DEFAULT_REGION = "ap-south-1"
DEFAULT_WEBP_QUALITY = 85
DEFAULT_ACL = "public-read"
DEFAULT_VARIANTS: Final[tuple[str, ...]] = (VARIANT_ORIGINAL, VARIANT_THUMBNAIL)
DEFAULT_VARIANT_MAX_DIMENSIONS: Final[dict[str, int]] = {
    VARIANT_ORIGINAL: 1200,
    VARIANT_THUMBNAIL: 300,
}
DEFAULT_IDENTIFIER_ATTRIBUTE = "slug"
DEFAULT_COUNT_ATTRIBUTE = "image_count"

# Required fields, in validation order
REQUIRED_CONFIG_FIELDS: Final[tuple[str, ...]] = (
    "bucket",
    "region",
    "access_key_id",
    "secret_access_key",
)


# ============================================================================
# Record Attributes
# ============================================================================

# Container field older records keep their count in
LEGACY_COUNT_CONTAINER_ATTRIBUTE = "specifications"
LEGACY_COUNT_KEY = "image_count"

UPDATED_AT_ATTRIBUTE = "updated_at"
ID_ATTRIBUTE = "id"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_S3_BUCKET = "S3_BUCKET"
ENV_S3_REGION = "S3_REGION"
ENV_S3_PREFIX = "S3_PREFIX"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_RECORD_TABLE_NAME = "IMAGE_RECORD_TABLE_NAME"
