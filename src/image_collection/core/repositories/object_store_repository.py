"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod


class ObjectStoreRepository(ABC):
    """Contract for storing image variant objects by key.

    Implementations could be S3, GCS, local disk, etc.
    The collection manager depends on this interface, not the implementation.
    """

    @abstractmethod
    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        acl: str,
    ) -> None:
        """Store bytes under a key, overwriting any existing object.

        Raises:
            StoreError: If the write fails
        """

    @abstractmethod
    def delete_object(self, *, key: str) -> None:
        """Delete the object under a key.

        Deleting an absent object succeeds.

        Raises:
            StoreError: If the deletion fails
        """

    @abstractmethod
    def copy_object(self, *, source_key: str, dest_key: str, acl: str) -> None:
        """Copy one object onto another key.

        Raises:
            StoreError: If the copy fails
        """

    @abstractmethod
    def head_object(self, *, key: str) -> bool:
        """Check whether an object exists without fetching its content.

        Returns:
            True if the object exists, False if it does not

        Raises:
            StoreError: For any failure other than "not found"
        """
