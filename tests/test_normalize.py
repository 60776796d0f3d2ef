"""Tests for record normalization."""

import pytest

from civicsearch.indexer.normalize import (
    RECORD_FIELDS,
    normalize_record,
    normalize_result,
    normalize_sources,
)
from civicsearch.models import EntityType, SourceResult


def test_normalize_projects_allow_listed_fields() -> None:
    raw = {
        "name": "Jane Doe",
        "title": "representative",
        "state_name": "Ohio",
        "district": 3,
        "party": "independent",
        "civil_services_url": "http://x",
    }

    [record] = normalize_result(SourceResult(data=[raw]), EntityType.HOUSE)

    assert record.to_dict() == {
        "data_type": "us-house-representative",
        "name": "Jane Doe",
        "title": "representative",
        "state_name": "Ohio",
        "civil_services_url": "http://x",
    }


def test_normalize_does_not_mutate_source_record() -> None:
    raw = {"name": "Jane Doe", "title": "representative", "extra": 1}

    record = normalize_record(raw, EntityType.HOUSE)

    assert raw == {"name": "Jane Doe", "title": "representative", "extra": 1}
    assert "data_type" not in raw
    with pytest.raises(TypeError):
        record.fields["name"] = "changed"  # type: ignore[index]


def test_normalize_overrides_source_data_type() -> None:
    record = normalize_record({"name": "X", "data_type": "bogus"}, EntityType.SENATE)
    assert record.get("data_type") == "us-senator"


def test_normalize_missing_fields_are_omitted() -> None:
    record = normalize_record({"name": "Sam Lee"}, EntityType.CITY_COUNCIL)

    assert record.to_dict() == {"data_type": "city-councilor", "name": "Sam Lee"}
    assert record.get("city_name") is None


def test_normalize_returns_none_without_data_or_fields() -> None:
    assert normalize_result(SourceResult(), EntityType.STATE) is None
    assert normalize_result(SourceResult(data=[{"name": "x"}]), EntityType.STATE, frozenset()) is None


def test_normalize_single_mapping_payload() -> None:
    records = normalize_result(SourceResult(data={"name": "Ohio"}), EntityType.STATE)
    assert [r.get("name") for r in records] == ["Ohio"]


def test_normalize_sources_keeps_given_order() -> None:
    tagged = [
        (EntityType.HOUSE, SourceResult(data=[{"name": "a"}, {"name": "b"}])),
        (EntityType.SENATE, SourceResult()),
        (EntityType.STATE, SourceResult(data=[{"name": "c"}])),
    ]

    records = normalize_sources(tagged)

    assert [(r.data_type, r.get("name")) for r in records] == [
        (EntityType.HOUSE, "a"),
        (EntityType.HOUSE, "b"),
        (EntityType.STATE, "c"),
    ]


def test_record_fields_allow_list() -> None:
    assert RECORD_FIELDS == {
        "data_type",
        "name",
        "title",
        "state_name",
        "state_code",
        "city_name",
        "civil_services_url",
    }
