"""Core aggregation logic for the CivicSearch feed."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from civicsearch.config import CivicSearchSettings, get_settings
from civicsearch.identifiers import IdentifierEncoder
from civicsearch.indexer.diagnostics import merge_diagnostics
from civicsearch.indexer.documents import DocumentBuilder
from civicsearch.indexer.normalize import RECORD_FIELDS, normalize_sources
from civicsearch.models import AggregateResult, EntityType, SourceResult
from civicsearch.sources.base import SourceAdapter
from civicsearch.sources.elasticsearch import build_default_sources

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500


@dataclass(frozen=True)
class SourcePlan:
    """One source fetch issued by every aggregation run."""

    entity_type: EntityType
    sort: str


# Order matters: identifiers are assigned over the records in this order.
SOURCE_PLAN: Tuple[SourcePlan, ...] = (
    SourcePlan(EntityType.HOUSE, "state_code,district"),
    SourcePlan(EntityType.SENATE, "state_code,last_name"),
    SourcePlan(EntityType.CITY_COUNCIL, "state_code,district,last_name"),
    SourcePlan(EntityType.GOVERNOR, "state_code,last_name"),
    SourcePlan(EntityType.STATE, "state_code"),
)


class AggregationError(Exception):
    """Raised when a source fails and the whole aggregation is abandoned."""

    def __init__(self, entity_type: EntityType, message: str):
        super().__init__(f"{entity_type.value}: {message}")
        self.entity_type = entity_type


class CivicIndexer:
    """Collects civic-official records from every source into index documents."""

    def __init__(
        self,
        sources: Mapping[EntityType, SourceAdapter],
        builder: DocumentBuilder,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: Optional[float] = None,
    ):
        missing = [plan.entity_type.value for plan in SOURCE_PLAN if plan.entity_type not in sources]
        if missing:
            raise ValueError(f"No source configured for: {', '.join(missing)}")

        self.sources = dict(sources)
        self.builder = builder
        self.page_size = page_size
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Optional[CivicSearchSettings] = None,
        sources: Optional[Mapping[EntityType, SourceAdapter]] = None,
    ) -> "CivicIndexer":
        settings = settings or get_settings()
        builder = DocumentBuilder(
            IdentifierEncoder.from_settings(settings),
            domain=settings.document_domain,
            lifetime=settings.document_lifetime,
        )
        return cls(
            sources if sources is not None else build_default_sources(settings),
            builder,
            page_size=settings.page_size,
            timeout=settings.fetch_timeout_seconds,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def fetch(self) -> AggregateResult:
        """Fetch every source and build the aggregate feed.

        Raises:
            AggregationError: If any source fails or the run times out
        """

        start = time.perf_counter()
        logger.info("Fetching civic records from %s sources", len(SOURCE_PLAN))

        results = await self._fetch_all()
        for plan, result in zip(SOURCE_PLAN, results):
            logger.info(
                "Source %s returned %s records",
                plan.entity_type.value,
                _record_count(result),
            )

        diagnostics = merge_diagnostics(results)
        records = normalize_sources(
            ((plan.entity_type, result) for plan, result in zip(SOURCE_PLAN, results)),
            RECORD_FIELDS,
        )
        documents = self.builder.build(records)

        logger.info(
            "Built %s documents from %s records",
            len(documents),
            len(records),
            extra={"duration_seconds": round(time.perf_counter() - start, 2)},
        )

        return AggregateResult(
            notices=diagnostics.notices,
            warnings=diagnostics.warnings,
            errors=diagnostics.errors,
            data=tuple(documents),
        )

    # ------------------------------------------------------------------
    # Fan-out helpers
    # ------------------------------------------------------------------
    async def _fetch_all(self) -> List[SourceResult]:
        tasks = [
            asyncio.create_task(self._fetch_source(plan), name=plan.entity_type.value)
            for plan in SOURCE_PLAN
        ]

        try:
            done, pending = await asyncio.wait(
                tasks, timeout=self.timeout, return_when=asyncio.FIRST_EXCEPTION
            )
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        for plan, task in zip(SOURCE_PLAN, tasks):
            if task in done and not task.cancelled() and task.exception() is not None:
                exc = task.exception()
                logger.error("Source %s failed", plan.entity_type.value, exc_info=exc)
                raise AggregationError(plan.entity_type, str(exc) or type(exc).__name__) from exc

        if pending:
            slowest = next(plan for plan, task in zip(SOURCE_PLAN, tasks) if task in pending)
            raise AggregationError(
                slowest.entity_type, f"timed out after {self.timeout} seconds"
            )

        return [task.result() for task in tasks]

    async def _fetch_source(self, plan: SourcePlan) -> SourceResult:
        criteria: Dict[str, str] = {
            "pageSize": str(self.page_size),
            "sort": plan.sort,
        }
        result = await self.sources[plan.entity_type].search(criteria)
        if isinstance(result, SourceResult):
            return result
        return SourceResult.from_dict(result)


def _record_count(result: SourceResult) -> int:
    if result.data is None:
        return 0
    if isinstance(result.data, Mapping):
        return 1
    return len(result.data)


def run_fetch(settings: Optional[CivicSearchSettings] = None) -> AggregateResult:
    """Run one aggregation from synchronous code."""

    indexer = CivicIndexer.from_settings(settings)
    return asyncio.run(indexer.fetch())


__all__ = ["AggregationError", "CivicIndexer", "SOURCE_PLAN", "SourcePlan", "run_fetch"]
