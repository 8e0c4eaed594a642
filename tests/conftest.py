"""
Pytest configuration and fixtures for image collection tests.
Provides AWS mocking, S3 and DynamoDB fixtures with proper cleanup.
"""

import io
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

from image_collection.core.config import Configuration, reset_configuration
from image_collection.core.models.errors import EncodeError
from image_collection.core.models.upload import UploadedFile

TEST_BUCKET = "test-bucket"
TEST_REGION = "us-east-1"
TEST_PREFIX = "test-app/test/images"
TEST_TABLE = "image-records"


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Isolate tests from the developer's AWS environment."""
    monkeypatch.setenv("AWS_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("IMAGE_RECORD_TABLE_NAME", TEST_TABLE)
    for name in ("AWS_ENDPOINT_URL", "S3_BUCKET", "S3_REGION", "S3_PREFIX"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def default_configuration():
    reset_configuration()
    yield
    reset_configuration()


@pytest.fixture
def config() -> Configuration:
    return Configuration(
        bucket=TEST_BUCKET,
        region=TEST_REGION,
        prefix=TEST_PREFIX,
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
    )


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=TEST_REGION)


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    s3_client.create_bucket(Bucket=TEST_BUCKET)

    yield s3_client

    _cleanup_s3_objects(s3_client, TEST_BUCKET)


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[[str, bytes], dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("test-app/test/images/chair/original.webp", b"data")
    """

    def _put(key: str, body: bytes, content_type: str = "image/webp"):
        return s3_bucket.put_object(
            Bucket=TEST_BUCKET, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to get an object's content from S3.

    Usage:
        content = s3_get_object("test-app/test/images/chair/original.webp")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_bucket.get_object(Bucket=TEST_BUCKET, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_object_keys(s3_bucket) -> Callable[[], list[str]]:
    """
    Helper to list every key in the test bucket, sorted.

    Usage:
        assert s3_object_keys() == ["a/original.webp"]
    """

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=TEST_BUCKET)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=TEST_REGION)


@pytest.fixture(scope="function")
def record_table(dynamodb_resource):
    """DynamoDB table keyed by ``record_id``; moto drops it on context exit."""
    table = dynamodb_resource.create_table(
        TableName=TEST_TABLE,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "record_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "record_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


def _image_bytes(size: tuple[int, int], fmt: str, mode: str = "RGB") -> bytes:
    color: Any = (200, 40, 40, 128) if mode == "RGBA" else "red"
    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """
    Helper to render a solid-colour image.

    Usage:
        data = make_image_bytes((800, 400), "PNG")
    """
    return _image_bytes


@pytest.fixture
def sample_png_bytes() -> bytes:
    return _image_bytes((64, 48), "PNG")


@pytest.fixture
def image_file(sample_png_bytes) -> UploadedFile:
    return UploadedFile(content_type="image/png", filename="chair.png", data=sample_png_bytes)


@pytest.fixture
def text_file() -> UploadedFile:
    return UploadedFile(content_type="text/plain", filename="notes.txt", data=b"hello")


class RecordingEncoder:
    """Encoder test double that tags output with the requested size."""

    def __init__(self, fail_for: set[int] | None = None) -> None:
        self.calls: list[tuple[int, int]] = []
        self._fail_for = fail_for or set()

    def __call__(self, source: bytes, max_dimension: int, quality: int) -> bytes:
        self.calls.append((max_dimension, quality))
        if max_dimension in self._fail_for:
            raise EncodeError(message="boom")
        return f"webp:{max_dimension}:".encode() + source


@pytest.fixture
def encoder() -> RecordingEncoder:
    return RecordingEncoder()


@pytest.fixture
def make_encoder() -> Callable[..., RecordingEncoder]:
    """
    Helper to build an encoder that fails for some sizes.

    Usage:
        encoder = make_encoder(fail_for={300})
    """
    return RecordingEncoder
