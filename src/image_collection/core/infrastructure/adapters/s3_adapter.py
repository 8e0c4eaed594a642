"""Thin adapter for interacting with Amazon S3."""

from typing import Any, Protocol

import boto3

from image_collection.core.config import Configuration


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        ACL: str,
    ) -> Any: ...

    def delete_object(self, *, Bucket: str, Key: str) -> Any: ...

    def copy_object(
        self,
        *,
        Bucket: str,
        Key: str,
        CopySource: dict[str, str],
        ACL: str,
    ) -> Any: ...

    def head_object(self, *, Bucket: str, Key: str) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str,
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...

    def copy_object(self, *, source_key: str, dest_key: str, acl: str) -> None: ...

    def head_object(self, *, key: str) -> dict[str, Any]: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, config: Configuration) -> None:
        """Create S3 client from the collection configuration."""
        if not config.bucket:
            raise RuntimeError("S3 bucket is not configured")

        self._bucket = config.bucket

        client_kwargs: dict[str, Any] = {"region_name": config.region}
        if config.endpoint_url:
            client_kwargs["endpoint_url"] = config.endpoint_url

        credentials = config.credentials()
        if credentials:
            client_kwargs["aws_access_key_id"] = credentials.access_key
            client_kwargs["aws_secret_access_key"] = credentials.secret_key

        self._client: _Boto3S3Client = boto3.client("s3", **client_kwargs)

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str,
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            ACL=acl,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )

    def copy_object(self, *, source_key: str, dest_key: str, acl: str) -> None:
        """Server-side copy within the bucket.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.copy_object(
            Bucket=self._bucket,
            Key=dest_key,
            CopySource={"Bucket": self._bucket, "Key": source_key},
            ACL=acl,
        )

    def head_object(self, *, key: str) -> dict[str, Any]:
        """Fetch object metadata without the body.
        Raises boto3 exceptions - caught by domain implementation.
        """
        response: dict[str, Any] = self._client.head_object(
            Bucket=self._bucket,
            Key=key,
        )
        return response
