"""Where a record keeps its image count.

Records store the count in one of three shapes, tried in this order:

1. a configured container field holding a dict, keyed by the count attribute
2. the count attribute as a field of its own
3. the legacy ``specifications`` container, keyed by ``image_count``

Records declaring none of these have no count: reads return 0 and writes
are dropped. The shape is resolved from the record's declared attribute
names on every access, so nothing is cached between operations.
"""

from abc import ABC, abstractmethod
from typing import Any

from image_collection.core.config import Configuration
from image_collection.core.repositories.record_repository import ImageRecord
from image_collection.core.utils.constants import (
    LEGACY_COUNT_CONTAINER_ATTRIBUTE,
    LEGACY_COUNT_KEY,
)


class CountStore(ABC):
    """Read and write access to a record's image count."""

    @abstractmethod
    def get_count(self) -> int: ...

    @abstractmethod
    def set_count(self, count: int) -> None: ...


class DirectCount(CountStore):
    """Count kept in a field of its own."""

    def __init__(self, record: ImageRecord, attribute: str) -> None:
        self.record = record
        self.attribute = attribute

    def get_count(self) -> int:
        return _to_int(self.record.read_attribute(self.attribute))

    def set_count(self, count: int) -> None:
        self.record.update_attributes({self.attribute: count})


class ContainerCount(CountStore):
    """Count kept under a key of a dict-valued field."""

    def __init__(self, record: ImageRecord, container: str, key: str) -> None:
        self.record = record
        self.container = container
        self.key = key

    def get_count(self) -> int:
        data = self.record.read_attribute(self.container)
        if not data:
            return 0
        return _to_int(data.get(self.key))

    def set_count(self, count: int) -> None:
        data = dict(self.record.read_attribute(self.container) or {})
        data[self.key] = count
        self.record.update_attributes({self.container: data})


class NullCount(CountStore):
    """No place to keep a count."""

    def get_count(self) -> int:
        return 0

    def set_count(self, count: int) -> None:
        return None


def resolve_count_store(record: ImageRecord | None, config: Configuration) -> CountStore:
    if record is None:
        return NullCount()

    names = record.attribute_names()
    container = config.count_container_attribute

    if container and container in names:
        return ContainerCount(record, container, config.count_attribute)
    if config.count_attribute in names:
        return DirectCount(record, config.count_attribute)
    if LEGACY_COUNT_CONTAINER_ATTRIBUTE in names:
        return ContainerCount(record, LEGACY_COUNT_CONTAINER_ATTRIBUTE, LEGACY_COUNT_KEY)
    return NullCount()


def _to_int(value: Any) -> int:
    # DynamoDB hands numbers back as Decimal
    if value is None:
        return 0
    return int(value)
