"""Data models shared by the CivicSearch sources and indexer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

# Opaque notice/warning/error token reported by a source.
Diagnostic = Any

RawRecord = Mapping[str, Any]


class EntityType(str, Enum):
    """Closed set of civic entity types fed into the index."""

    HOUSE = "us-house-representative"
    SENATE = "us-senator"
    CITY_COUNCIL = "city-councilor"
    GOVERNOR = "us-governor"
    STATE = "us-state"


def _as_tuple(values: Optional[Sequence[Diagnostic]]) -> Tuple[Diagnostic, ...]:
    if values is None:
        return ()
    return tuple(values)


@dataclass(frozen=True)
class SourceResult:
    """Output of a single source adapter call."""

    notices: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    errors: Tuple[Diagnostic, ...] = ()
    data: Optional[Union[Sequence[RawRecord], RawRecord]] = None
    meta: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SourceResult":
        """Build a result from a loose mapping; missing arrays become empty."""

        return cls(
            notices=_as_tuple(payload.get("notices")),
            warnings=_as_tuple(payload.get("warnings")),
            errors=_as_tuple(payload.get("errors")),
            data=payload.get("data"),
            meta=dict(payload.get("meta") or {}),
        )


@dataclass(frozen=True)
class NormalizedRecord:
    """Raw record projected onto the allow-listed fields, tagged by type."""

    data_type: EntityType
    fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, key: str, default: Any = None) -> Any:
        if key == "data_type":
            return self.data_type.value
        return self.fields.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        return {"data_type": self.data_type.value, **self.fields}


@dataclass(frozen=True)
class IndexDocument:
    """Document ready to be loaded into the search index."""

    domain: str
    identifier: str
    title: str
    description: str
    url: Optional[str]
    keywords: Tuple[str, ...]
    lifetime: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "identifier": self.identifier,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "keywords": list(self.keywords),
            "lifetime": self.lifetime,
        }


@dataclass(frozen=True)
class AggregateResult:
    """Merged diagnostics plus the index documents of one run."""

    notices: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    errors: Tuple[Diagnostic, ...] = ()
    data: Tuple[IndexDocument, ...] = ()

    def to_dict(self) -> Dict[str, List[Any]]:
        return {
            "notices": list(self.notices),
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "data": [doc.to_dict() for doc in self.data],
        }
