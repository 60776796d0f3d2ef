"""CivicSearch indexer package."""

from .core import AggregationError, CivicIndexer, run_fetch
from .diagnostics import merge_diagnostics
from .documents import DocumentBuilder
from .normalize import RECORD_FIELDS, normalize_result

__all__ = [
    "AggregationError",
    "CivicIndexer",
    "DocumentBuilder",
    "RECORD_FIELDS",
    "merge_diagnostics",
    "normalize_result",
    "run_fetch",
]
