"""Project raw source records onto the fields the index needs."""

from __future__ import annotations

from types import MappingProxyType
from typing import AbstractSet, Iterable, List, Mapping, Optional, Tuple

from civicsearch.models import (
    EntityType,
    NormalizedRecord,
    RawRecord,
    SourceResult,
)

RECORD_FIELDS: AbstractSet[str] = frozenset(
    {
        "data_type",
        "name",
        "title",
        "state_name",
        "state_code",
        "city_name",
        "civil_services_url",
    }
)


def normalize_record(
    raw: RawRecord, data_type: EntityType, fields: AbstractSet[str] = RECORD_FIELDS
) -> NormalizedRecord:
    """Return a new record holding only the allow-listed keys of ``raw``."""

    projected = {
        key: value
        for key, value in raw.items()
        if key in fields and key != "data_type"
    }
    return NormalizedRecord(data_type=data_type, fields=MappingProxyType(projected))


def normalize_result(
    result: SourceResult,
    data_type: EntityType,
    fields: AbstractSet[str] = RECORD_FIELDS,
) -> Optional[List[NormalizedRecord]]:
    """Normalize every record of a source result.

    Returns ``None`` when the source carried no data or the allow-list is
    empty; callers treat that the same as an empty list.
    """

    data = result.data
    if data is None or not fields:
        return None

    records = [data] if isinstance(data, Mapping) else list(data)
    return [normalize_record(raw, data_type, fields) for raw in records]


def normalize_sources(
    tagged_results: Iterable[Tuple[EntityType, SourceResult]],
    fields: AbstractSet[str] = RECORD_FIELDS,
) -> List[NormalizedRecord]:
    """Normalize each result and concatenate them in the given order."""

    combined: List[NormalizedRecord] = []
    for data_type, result in tagged_results:
        combined.extend(normalize_result(result, data_type, fields) or [])
    return combined


__all__ = [
    "RECORD_FIELDS",
    "normalize_record",
    "normalize_result",
    "normalize_sources",
]
