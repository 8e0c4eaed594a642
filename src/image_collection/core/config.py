"""Connection and policy settings for an image collection."""

import os
from typing import Any

from botocore.credentials import Credentials
from pydantic import BaseModel, ConfigDict, Field, field_validator

from image_collection.core.models.errors import ConfigError
from image_collection.core.utils.constants import (
    DEFAULT_ACL,
    DEFAULT_COUNT_ATTRIBUTE,
    DEFAULT_IDENTIFIER_ATTRIBUTE,
    DEFAULT_REGION,
    DEFAULT_VARIANT_MAX_DIMENSIONS,
    DEFAULT_VARIANTS,
    DEFAULT_WEBP_QUALITY,
    ENV_AWS_ENDPOINT_URL,
    ENV_S3_BUCKET,
    ENV_S3_PREFIX,
    ENV_S3_REGION,
    REQUIRED_CONFIG_FIELDS,
    VARIANT_ORIGINAL,
)


class Configuration(BaseModel):
    """Immutable settings shared by every collection manager bound to it.

    Bucket, region and prefix default to the ``S3_BUCKET``, ``S3_REGION``
    and ``S3_PREFIX`` environment variables. Missing required values are
    only reported by :meth:`validate_required`, so a partially filled
    configuration can still be built and completed later through
    :func:`image_collection.configure`.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    bucket: str | None = Field(
        default_factory=lambda: os.getenv(ENV_S3_BUCKET),
        description="S3 bucket holding the images",
    )
    region: str | None = Field(
        default_factory=lambda: os.getenv(ENV_S3_REGION, DEFAULT_REGION),
        description="AWS region of the bucket",
    )
    prefix: str | None = Field(
        default_factory=lambda: os.getenv(ENV_S3_PREFIX),
        description="Key prefix shared by all collections",
    )
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = Field(
        default_factory=lambda: os.getenv(ENV_AWS_ENDPOINT_URL),
        description="Alternate S3 endpoint (LocalStack, MinIO)",
    )

    variant_max_dimensions: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_VARIANT_MAX_DIMENSIONS),
    )
    webp_quality: int = Field(DEFAULT_WEBP_QUALITY, ge=1, le=100)
    acl: str = DEFAULT_ACL
    variants: list[str] = Field(default_factory=lambda: list(DEFAULT_VARIANTS))

    identifier_attribute: str = DEFAULT_IDENTIFIER_ATTRIBUTE
    count_attribute: str = DEFAULT_COUNT_ATTRIBUTE
    count_container_attribute: str | None = None

    @field_validator("prefix")
    @classmethod
    def strip_prefix_slashes(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip("/") or None

    @field_validator("variants")
    @classmethod
    def validate_variants(cls, value: list[str]) -> list[str]:
        """Drop blanks and duplicates while preserving order."""
        variants = list(dict.fromkeys(v.strip() for v in value if v and v.strip()))
        if not variants:
            raise ValueError("at least one variant is required")
        return variants

    @field_validator("variant_max_dimensions")
    @classmethod
    def validate_dimensions(cls, value: dict[str, int]) -> dict[str, int]:
        for variant, size in value.items():
            if size < 1:
                raise ValueError(f"max dimension for '{variant}' must be positive")
        return value

    def validate_required(self) -> None:
        """Fail fast on the first missing required field.

        Raises:
            ConfigError: naming the missing field
        """
        for field in REQUIRED_CONFIG_FIELDS:
            if not getattr(self, field):
                raise ConfigError(
                    message=f"{field} is required",
                    details={"field": field},
                )

    @property
    def base_url(self) -> str:
        url = f"https://{self.bucket}.s3.{self.region}.amazonaws.com"
        if self.prefix:
            url = f"{url}/{self.prefix}"
        return url

    def credentials(self) -> Credentials | None:
        if not (self.access_key_id and self.secret_access_key):
            return None
        return Credentials(self.access_key_id, self.secret_access_key)

    def max_dimension_for(self, variant: str) -> int:
        """Longest side allowed for a variant; unknown variants use the original's."""
        if variant in self.variant_max_dimensions:
            return self.variant_max_dimensions[variant]
        return self.variant_max_dimensions.get(
            VARIANT_ORIGINAL, DEFAULT_VARIANT_MAX_DIMENSIONS[VARIANT_ORIGINAL]
        )


_default_configuration: Configuration | None = None


def get_configuration() -> Configuration:
    """Return the process-wide default, built from the environment on first use."""
    global _default_configuration
    if _default_configuration is None:
        _default_configuration = Configuration()
    return _default_configuration


def configure(**options: Any) -> Configuration:
    """Merge options into the process-wide default and return the result.

    Example:
        configure(bucket="media", access_key_id="...", secret_access_key="...")
    """
    global _default_configuration
    current = get_configuration()
    _default_configuration = Configuration(**{**current.model_dump(), **options})
    return _default_configuration


def reset_configuration() -> None:
    global _default_configuration
    _default_configuration = None
