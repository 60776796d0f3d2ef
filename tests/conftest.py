"""Pytest configuration and fixtures."""

from typing import Dict

import pytest

from civicsearch.config import CivicSearchSettings, get_settings
from civicsearch.identifiers import IdentifierEncoder
from civicsearch.indexer.core import CivicIndexer
from civicsearch.indexer.documents import DocumentBuilder
from civicsearch.models import EntityType, SourceResult
from tests.source_stubs import StubSource

TEST_SECRET = "test-secret"


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch):
    """Keep cached settings from leaking between tests."""
    monkeypatch.setenv("CIVICSEARCH_HASHID_SECRET", TEST_SECRET)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> CivicSearchSettings:
    """Create test settings."""
    return CivicSearchSettings(
        _env_file=None,
        hashid_secret=TEST_SECRET,
        elasticsearch_url="http://search.test:9200",
        environment="test",
        log_level="DEBUG",
    )


@pytest.fixture
def encoder() -> IdentifierEncoder:
    return IdentifierEncoder(TEST_SECRET)


@pytest.fixture
def builder(encoder: IdentifierEncoder) -> DocumentBuilder:
    return DocumentBuilder(encoder)


@pytest.fixture
def sample_results() -> Dict[EntityType, SourceResult]:
    """One small result per entity type, with overlapping diagnostics."""
    return {
        EntityType.HOUSE: SourceResult(
            notices=("house index refreshed",),
            data=[
                {
                    "name": "  Jane   Doe ",
                    "title": "representative",
                    "state_name": "Ohio",
                    "state_code": "OH",
                    "district": 3,
                    "civil_services_url": "http://x",
                }
            ],
        ),
        EntityType.SENATE: SourceResult(
            warnings=("stale cache",),
            data=[
                {
                    "name": "John Smith",
                    "title": "SENATOR",
                    "state_name": "Texas",
                    "state_code": "TX",
                    "civil_services_url": "http://senate/1",
                }
            ],
        ),
        EntityType.CITY_COUNCIL: SourceResult(
            warnings=("stale cache",),
            data=[
                {
                    "name": "Sam Lee",
                    "title": "councilor",
                    "city_name": "Austin",
                    "state_code": "TX",
                }
            ],
        ),
        EntityType.GOVERNOR: SourceResult(
            errors=({"code": 500, "message": "partial shard failure"},),
            data=[
                {
                    "name": "   ",
                    "title": "governor",
                    "state_name": "Ohio",
                },
                {
                    "name": "Pat Quinn",
                    "title": "governor",
                    "state_name": "Illinois",
                },
            ],
        ),
        EntityType.STATE: SourceResult(
            notices=("house index refreshed",),
            data=[{"name": "Ohio", "title": "state", "state_code": "OH"}],
        ),
    }


@pytest.fixture
def stub_sources(sample_results: Dict[EntityType, SourceResult]) -> Dict[EntityType, StubSource]:
    return {
        entity_type: StubSource(entity_type, result)
        for entity_type, result in sample_results.items()
    }


@pytest.fixture
def indexer(stub_sources: Dict[EntityType, StubSource], builder: DocumentBuilder) -> CivicIndexer:
    return CivicIndexer(stub_sources, builder)
