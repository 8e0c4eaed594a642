"""In-memory record backed by a mutable mapping."""

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from image_collection.core.repositories.record_repository import ImageRecord
from image_collection.core.utils.constants import UPDATED_AT_ATTRIBUTE
from image_collection.core.utils.time import utc_now_iso


class MappingRecord(ImageRecord):
    """Record whose fields live in a plain dict, updated in place.

    Useful for embedding applications that hold entity state as dicts and
    for tests. Declared attribute names default to the keys present when
    the record is wrapped.
    """

    def __init__(
        self,
        data: MutableMapping[str, Any],
        *,
        attribute_names: Iterable[str] | None = None,
        param: str | None = None,
    ) -> None:
        self.data = data
        self._attribute_names = frozenset(
            attribute_names if attribute_names is not None else data.keys()
        )
        self._param = param

    def attribute_names(self) -> frozenset[str]:
        return self._attribute_names

    def read_attribute(self, name: str) -> Any:
        return self.data.get(name)

    def update_attributes(self, values: Mapping[str, Any]) -> None:
        self.data.update(values)
        self.data[UPDATED_AT_ATTRIBUTE] = utc_now_iso()

    def to_param(self) -> str | None:
        return self._param

    def __repr__(self) -> str:
        return f"MappingRecord({self.data!r})"
