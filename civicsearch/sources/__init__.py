"""Record sources for the CivicSearch indexer."""

from .base import SearchCriteria, SourceAdapter, SourceError
from .elasticsearch import ElasticsearchSourceAdapter, build_default_sources

__all__ = [
    "ElasticsearchSourceAdapter",
    "SearchCriteria",
    "SourceAdapter",
    "SourceError",
    "build_default_sources",
]
