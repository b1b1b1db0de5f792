"""Unit tests for device keys, records and the device index."""

from __future__ import annotations

import pytest

from custom_components.comelit_sb.domain import (
    DeviceCategory,
    DeviceIndex,
    DeviceKey,
    DeviceRecord,
    normalize_category,
)


def test_normalize_category_accepts_values() -> None:
    """Plain strings resolve to their category."""

    assert normalize_category("light") is DeviceCategory.LIGHT
    assert normalize_category(DeviceCategory.BLIND) is DeviceCategory.BLIND


def test_normalize_category_rejects_unknown() -> None:
    """Unknown categories raise ValueError."""

    with pytest.raises(ValueError, match="Unknown device category"):
        normalize_category("sprinkler")


def test_device_key_scopes_identifier_by_category() -> None:
    """Identical identifiers in two categories are different keys."""

    light = DeviceKey(DeviceCategory.LIGHT, "3")
    blind = DeviceKey("blind", " 3 ")

    assert light != blind
    assert blind.identifier == "3"
    assert str(light) == "light:3"
    assert light.unique_key == "light_3"
    assert DeviceKey("light", "3") == light
    assert hash(DeviceKey("light", "3")) == hash(light)


def test_device_key_rejects_empty_identifier() -> None:
    with pytest.raises(ValueError):
        DeviceKey(DeviceCategory.LIGHT, "  ")


def test_record_payload_is_read_only(make_record) -> None:
    """Record payloads cannot be mutated in place."""

    record = make_record("light", "1", status="1")

    with pytest.raises(TypeError):
        record.payload["status"] = "0"  # type: ignore[index]


def test_record_merged_keeps_untouched_fields(make_record) -> None:
    """Incremental updates overlay changed fields on the old payload."""

    record = make_record("thermostat", "12", umidita="55", auto_man_umi="2")

    updated = record.merged({"umidita": "58"})

    assert updated.payload == {"umidita": "58", "auto_man_umi": "2"}
    assert record.payload["umidita"] == "55"
    assert updated.key == record.key


def test_index_partitions_records_by_category(make_record) -> None:
    """from_records places each record in its category mapping."""

    index = DeviceIndex.from_records(
        [
            make_record("light", "0"),
            make_record("light", "1"),
            make_record("blind", "0"),
            make_record("supplier", "0"),
        ]
    )

    assert set(index.lights) == {"0", "1"}
    assert set(index.blinds) == {"0"}
    assert index.counts() == {
        "light": 2,
        "thermostat": 0,
        "blind": 1,
        "outlet": 0,
        "supplier": 1,
    }
    assert len(index) == 4
    assert [record.category for record in index.records()] == [
        DeviceCategory.LIGHT,
        DeviceCategory.LIGHT,
        DeviceCategory.BLIND,
        DeviceCategory.SUPPLIER,
    ]


def test_index_replace_ignores_unknown_identifiers(make_record) -> None:
    """replace never adds identifiers to the index."""

    index = DeviceIndex.from_records([make_record("outlet", "4", status="0")])

    assert index.replace(make_record("outlet", "4", status="1")) is True
    assert index.get("outlet", "4").payload["status"] == "1"
    assert index.replace(make_record("outlet", "5", status="1")) is False
    assert index.get(DeviceCategory.OUTLET, "5") is None
    assert len(index) == 1


def test_index_has_no_alarm_mapping() -> None:
    with pytest.raises(ValueError):
        DeviceIndex().mapping_for(DeviceCategory.ALARM)


def test_record_normalises_identifier_and_category() -> None:
    record = DeviceRecord(identifier=7, name="Pump", category="outlet")  # type: ignore[arg-type]

    assert record.identifier == "7"
    assert record.category is DeviceCategory.OUTLET
    assert record.get("status", "0") == "0"
