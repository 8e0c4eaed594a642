"""Unit tests for S3ObjectStore."""

from typing import Any

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from image_collection.core.infrastructure.adapters.s3_adapter import S3Adapter
from image_collection.core.infrastructure.aws.s3_object_store import S3ObjectStore
from image_collection.core.models.errors import StoreError


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code}}, operation)


class DummyS3Adapter:
    """Configurable S3 adapter test double."""

    def __init__(
        self,
        *,
        put_exc: Exception | None = None,
        delete_exc: Exception | None = None,
        copy_exc: Exception | None = None,
        head_exc: Exception | None = None,
    ) -> None:
        self._put_exc = put_exc
        self._delete_exc = delete_exc
        self._copy_exc = copy_exc
        self._head_exc = head_exc
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def put_object(self, **kwargs: Any) -> None:
        self.calls.append(("put", kwargs))
        if self._put_exc:
            raise self._put_exc

    def delete_object(self, **kwargs: Any) -> None:
        self.calls.append(("delete", kwargs))
        if self._delete_exc:
            raise self._delete_exc

    def copy_object(self, **kwargs: Any) -> None:
        self.calls.append(("copy", kwargs))
        if self._copy_exc:
            raise self._copy_exc

    def head_object(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("head", kwargs))
        if self._head_exc:
            raise self._head_exc
        return {"ContentLength": 1}


class TestS3ObjectStore:
    def test_put_object_passes_through(self) -> None:
        adapter = DummyS3Adapter()
        store = S3ObjectStore(adapter)

        store.put_object(key="a/original.webp", body=b"x", content_type="image/webp", acl="private")

        assert adapter.calls == [
            ("put", {"key": "a/original.webp", "body": b"x", "content_type": "image/webp", "acl": "private"})
        ]

    @pytest.mark.parametrize(
        "exc", [client_error("AccessDenied", "PutObject"), Exception("boom")]
    )
    def test_put_object_failure_translated(self, exc: Exception) -> None:
        store = S3ObjectStore(DummyS3Adapter(put_exc=exc))

        with pytest.raises(StoreError) as err:
            store.put_object(key="a/original.webp", body=b"x", content_type="image/webp", acl="private")

        assert err.value.error_code == "OBJECT_PUT_FAILED"
        assert err.value.details == {"key": "a/original.webp"}

    def test_delete_missing_object_is_success(self) -> None:
        store = S3ObjectStore(DummyS3Adapter(delete_exc=client_error("NoSuchKey", "DeleteObject")))

        store.delete_object(key="a/original.webp")

    @pytest.mark.parametrize(
        "exc", [client_error("AccessDenied", "DeleteObject"), Exception("boom")]
    )
    def test_delete_failure_translated(self, exc: Exception) -> None:
        store = S3ObjectStore(DummyS3Adapter(delete_exc=exc))

        with pytest.raises(StoreError) as err:
            store.delete_object(key="a/original.webp")

        assert err.value.error_code == "OBJECT_DELETE_FAILED"

    def test_copy_failure_translated(self) -> None:
        store = S3ObjectStore(DummyS3Adapter(copy_exc=client_error("NoSuchKey", "CopyObject")))

        with pytest.raises(StoreError) as err:
            store.copy_object(source_key="a/original_1.webp", dest_key="a/original.webp", acl="private")

        assert err.value.error_code == "OBJECT_COPY_FAILED"
        assert err.value.details == {
            "source_key": "a/original_1.webp",
            "dest_key": "a/original.webp",
        }

    def test_head_existing_object(self) -> None:
        assert S3ObjectStore(DummyS3Adapter()).head_object(key="a/original.webp") is True

    @pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
    def test_head_not_found_is_false(self, code: str) -> None:
        store = S3ObjectStore(DummyS3Adapter(head_exc=client_error(code, "HeadObject")))

        assert store.head_object(key="a/original.webp") is False

    @pytest.mark.parametrize(
        "exc",
        [
            client_error("403", "HeadObject"),
            EndpointConnectionError(endpoint_url="https://test-bucket.s3.amazonaws.com"),
            Exception("boom"),
        ],
    )
    def test_head_other_failure_translated(self, exc: Exception) -> None:
        store = S3ObjectStore(DummyS3Adapter(head_exc=exc))

        with pytest.raises(StoreError) as err:
            store.head_object(key="a/original.webp")

        assert err.value.error_code == "OBJECT_HEAD_FAILED"
        assert err.value.details == {"key": "a/original.webp"}


class TestS3ObjectStoreWithMoto:
    def test_round_trip_against_bucket(self, config, s3_bucket, s3_get_object) -> None:
        store = S3ObjectStore(S3Adapter(config))

        store.put_object(key="a/original_1.webp", body=b"one", content_type="image/webp", acl="public-read")
        store.copy_object(source_key="a/original_1.webp", dest_key="a/original.webp", acl="public-read")
        store.delete_object(key="a/original_1.webp")

        assert s3_get_object("a/original.webp") == b"one"
        assert store.head_object(key="a/original.webp") is True
        assert store.head_object(key="a/original_1.webp") is False

    def test_delete_absent_object_against_bucket(self, config, s3_bucket) -> None:
        store = S3ObjectStore(S3Adapter(config))

        store.delete_object(key="a/never-written.webp")
