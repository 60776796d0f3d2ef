"""Elasticsearch-backed source adapters, one per entity type."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from civicsearch.config import CivicSearchSettings
from civicsearch.models import EntityType, SourceResult
from civicsearch.sources.base import SearchCriteria, SourceError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 30

INDEX_SUFFIXES = {
    EntityType.HOUSE: "house",
    EntityType.SENATE: "senate",
    EntityType.CITY_COUNCIL: "city_council",
    EntityType.GOVERNOR: "governor",
    EntityType.STATE: "state",
}

DEFAULT_SORT = {
    EntityType.HOUSE: "state_code,district",
    EntityType.SENATE: "state_code,last_name",
    EntityType.CITY_COUNCIL: "state_code,district,last_name",
    EntityType.GOVERNOR: "state_code,last_name",
    EntityType.STATE: "state_name",
}


def _positive_int(value: Optional[str], default: int) -> int:
    """Parse a query-string integer, falling back to ``default`` when invalid."""
    if value is None:
        return default
    text = str(value).strip()
    if not text.lstrip("+").isdigit():
        return default
    number = int(text)
    return number if number >= 1 else default


class ElasticsearchSourceAdapter:
    """Reads one entity type's records from its search index."""

    def __init__(
        self,
        entity_type: EntityType,
        base_url: str,
        index_name: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15.0,
    ):
        self.entity_type = entity_type
        self.base_url = base_url.rstrip("/")
        self.index_name = index_name
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": "CivicSearch/1.1 (Civic Data Indexer)"}
        )

    @classmethod
    def from_settings(
        cls,
        entity_type: EntityType,
        settings: CivicSearchSettings,
        session: Optional[requests.Session] = None,
    ) -> "ElasticsearchSourceAdapter":
        return cls(
            entity_type,
            base_url=settings.search_base_url,
            index_name=settings.index_name(INDEX_SUFFIXES[entity_type]),
            session=session,
            timeout=settings.http_timeout_seconds,
        )

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/{self.index_name}/_search"

    async def search(self, criteria: SearchCriteria) -> SourceResult:
        # requests is blocking; keep the event loop free for the other sources.
        return await asyncio.to_thread(self.search_sync, criteria)

    def build_search_params(self, criteria: SearchCriteria) -> Tuple[Dict[str, Any], int]:
        """Translate API-style criteria into search parameters.

        Returns:
            tuple: (query-string parameters, requested page number)
        """

        size = _positive_int(criteria.get("pageSize"), DEFAULT_PAGE_SIZE)
        page = _positive_int(criteria.get("page"), 1)
        sort = (criteria.get("sort") or DEFAULT_SORT[self.entity_type]).strip()

        params: Dict[str, Any] = {"size": size, "from": (page - 1) * size}
        if sort:
            params["sort"] = sort
        return params, page

    def search_sync(self, criteria: SearchCriteria) -> SourceResult:
        params, page = self.build_search_params(criteria)

        try:
            response = self.session.post(
                self.search_url,
                params=params,
                json={"query": {"match_all": {}}},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            # The search engine's own failures are reported, not raised.
            logger.warning(
                "Search request failed for %s", self.index_name, exc_info=exc
            )
            return SourceResult(errors=(f"{self.index_name}: {exc}",))

        try:
            payload = response.json()
            hits = payload["hits"]
            total = hits["total"]
            documents = hits["hits"]
        except (ValueError, KeyError, TypeError) as exc:
            raise SourceError(
                f"Malformed search response from {self.index_name}"
            ) from exc

        if isinstance(total, Mapping):
            total = total.get("value", 0)
        total = int(total or 0)

        data = [self.prepare_for_output(hit.get("_source") or {}) for hit in documents]
        size = params["size"]
        meta = {
            "total": total,
            "showing": len(data),
            "pages": math.ceil(total / size),
            "page": page,
        }

        notices: List[str] = []
        remaining = total - (params["from"] + len(data))
        if remaining > 0:
            notices.append(
                f"{self.index_name}: {remaining} of {total} records beyond page {page}"
            )

        logger.debug(
            "Fetched %s records from %s", len(data), self.index_name, extra=meta
        )
        return SourceResult(notices=tuple(notices), data=data, meta=meta)

    def prepare_for_output(self, source: Mapping[str, Any]) -> Dict[str, Any]:
        record = dict(source)
        if self.entity_type is EntityType.STATE:
            # State documents are keyed by state_name and carry no role label.
            record.setdefault("name", source.get("state_name"))
            record.setdefault("title", "state")
        return record


def build_default_sources(
    settings: CivicSearchSettings,
) -> Dict[EntityType, ElasticsearchSourceAdapter]:
    """Return one adapter per entity type, each with its own HTTP session."""

    return {
        entity_type: ElasticsearchSourceAdapter.from_settings(entity_type, settings)
        for entity_type in EntityType
    }


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ElasticsearchSourceAdapter",
    "INDEX_SUFFIXES",
    "build_default_sources",
]
