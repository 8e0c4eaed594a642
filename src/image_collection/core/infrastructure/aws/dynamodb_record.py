"""DynamoDB-backed implementation of ImageRecord."""

from collections.abc import Iterable, Mapping
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from image_collection.core.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapter,
    DynamoDBAdapterProtocol,
)
from image_collection.core.models.errors import RecordError
from image_collection.core.repositories.record_repository import ImageRecord
from image_collection.core.utils.constants import (
    DEFAULT_COUNT_ATTRIBUTE,
    ERROR_CODE_RECORD_FETCH_FAILED,
    ERROR_CODE_RECORD_UPDATE_FAILED,
    LEGACY_COUNT_CONTAINER_ATTRIBUTE,
    UPDATED_AT_ATTRIBUTE,
)
from image_collection.core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DynamoDBRecord(ImageRecord):
    """A single DynamoDB item acting as the collection's owner record.

    Every read fetches the item again, so counts written by another
    process are picked up by the next operation. DynamoDB items have no
    schema, so the declared attribute names are the keys the item holds
    plus ``count_attributes``, which makes a fresh item without a count
    still keep one. Items whose count lives only in the legacy
    ``specifications`` container keep using it. Pass ``attribute_names``
    to pin the declared names instead.
    """

    def __init__(
        self,
        key: dict[str, Any],
        *,
        attribute_names: Iterable[str] | None = None,
        count_attributes: Iterable[str] = (DEFAULT_COUNT_ATTRIBUTE,),
        adapter: DynamoDBAdapterProtocol | None = None,
    ) -> None:
        """Bind to the item identified by its primary key.

        ``count_attributes`` should name the configured count field, or the
        count container field when one is configured.
        """
        self.key = key
        self._attribute_names = (
            frozenset(attribute_names) if attribute_names is not None else None
        )
        self._count_attributes = frozenset(count_attributes)
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def fetch_item(self) -> dict[str, Any]:
        """Return the current item, or an empty dict when it does not exist.

        Raises:
            RecordError: If the fetch fails
        """
        try:
            response = self._db.get_item(key=self.key)

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"key": self.key})
            raise RecordError(
                message="Unable to read collection record",
                error_code=ERROR_CODE_RECORD_FETCH_FAILED,
                details={"key": self.key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching record")
            raise RecordError(
                message="Unable to read collection record",
                error_code=ERROR_CODE_RECORD_FETCH_FAILED,
                details={"key": self.key},
            ) from exc

        item = response.get("Item")
        if item is None:
            return {}
        if not isinstance(item, dict):
            raise RecordError(
                message="Invalid collection record format",
                error_code=ERROR_CODE_RECORD_FETCH_FAILED,
                details={"key": self.key},
            )
        return item

    def attribute_names(self) -> frozenset[str]:
        if self._attribute_names is not None:
            return self._attribute_names

        names = frozenset(self.fetch_item().keys())
        if LEGACY_COUNT_CONTAINER_ATTRIBUTE in names and not names & self._count_attributes:
            return names
        return names | self._count_attributes

    def read_attribute(self, name: str) -> Any:
        return self.fetch_item().get(name)

    def update_attributes(self, values: Mapping[str, Any]) -> None:
        """Write all fields plus ``updated_at`` in one update_item call.

        Raises:
            RecordError: If the update fails
        """
        fields = {**values, UPDATED_AT_ATTRIBUTE: utc_now_iso()}

        names: dict[str, str] = {}
        placeholders: dict[str, Any] = {}
        assignments: list[str] = []
        for position, (field, value) in enumerate(fields.items()):
            names[f"#f{position}"] = field
            placeholders[f":v{position}"] = value
            assignments.append(f"#f{position} = :v{position}")

        logger.debug(
            "Updating record",
            extra={"key": self.key, "fields": sorted(fields)},
        )

        try:
            self._db.update_item(
                key=self.key,
                update_expression="SET " + ", ".join(assignments),
                attribute_names=names,
                attribute_values=placeholders,
            )

        except ClientError as exc:
            logger.error("DynamoDB update_item failed", extra={"key": self.key})
            raise RecordError(
                message="Unable to update collection record",
                error_code=ERROR_CODE_RECORD_UPDATE_FAILED,
                details={"key": self.key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error updating record")
            raise RecordError(
                message="Unable to update collection record",
                error_code=ERROR_CODE_RECORD_UPDATE_FAILED,
                details={"key": self.key},
            ) from exc

    def to_param(self) -> str | None:
        # Single-attribute primary keys double as the external parameter
        if len(self.key) == 1:
            return str(next(iter(self.key.values())))
        return None
