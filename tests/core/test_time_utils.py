from datetime import datetime, timezone

from image_collection.core.records.mapping_record import MappingRecord
from image_collection.core.utils.time import utc_now, utc_now_iso


def test_utc_now_is_aware() -> None:
    assert utc_now().tzinfo == timezone.utc


def test_iso_stamp_parses_back_to_utc() -> None:
    before = utc_now()

    parsed = datetime.fromisoformat(utc_now_iso())

    assert parsed.tzinfo == timezone.utc
    assert before <= parsed <= utc_now()


def test_record_stamps_order_as_strings() -> None:
    record = MappingRecord({"image_count": 0})

    record.update_attributes({"image_count": 1})
    first = record.read_attribute("updated_at")
    record.update_attributes({"image_count": 2})

    assert first <= record.read_attribute("updated_at")
