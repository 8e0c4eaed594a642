"""Abstract contract for the external record that owns a collection."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class ImageRecord(ABC):
    """Contract for the entity whose images a collection manages.

    The record supplies the identifier used as the storage folder and
    persists the image count. Implementations could be an in-memory
    mapping, a DynamoDB item, an ORM row, etc.
    """

    @abstractmethod
    def attribute_names(self) -> frozenset[str]:
        """Names of the fields this record declares.

        Used to choose where the image count is stored.
        """

    @abstractmethod
    def read_attribute(self, name: str) -> Any:
        """Return the current value of a field, or None when unset.

        Raises:
            RecordError: If the record cannot be read
        """

    @abstractmethod
    def update_attributes(self, values: Mapping[str, Any]) -> None:
        """Write several fields at once, stamping ``updated_at`` in the same batch.

        Raises:
            RecordError: If the write fails
        """

    def to_param(self) -> str | None:
        """External parameter form of the record (e.g. a URL slug), if any."""
        return None
