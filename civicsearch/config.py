"""Configuration helpers for the CivicSearch indexer."""

from functools import lru_cache
from typing import Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings

from civicsearch.identifiers import DEFAULT_ALPHABET


class CivicSearchSettings(BaseSettings):
    """Environment-driven configuration."""

    # Identifier obfuscation
    hashid_secret: str = Field(..., min_length=1)
    hashid_min_length: int = Field(default=8, ge=0)
    hashid_alphabet: str = Field(default=DEFAULT_ALPHABET, min_length=16)

    # Backing search engine the sources read from
    elasticsearch_url: AnyHttpUrl = Field(default="http://localhost:9200")
    index_prefix: str = Field(default="civil_services")
    environment: str = Field(default="development")
    page_size: int = Field(default=500, ge=1)
    http_timeout_seconds: float = Field(default=15.0)
    fetch_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # Documents handed to the downstream index
    document_domain: str = Field(default="app.civil.services")
    document_lifetime: int = Field(default=1440, ge=1)

    # Feed API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8002)

    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CIVICSEARCH_",
        "extra": "ignore",
    }

    @property
    def search_base_url(self) -> str:
        return str(self.elasticsearch_url).rstrip("/")

    def index_name(self, suffix: str) -> str:
        """Return the environment-scoped index name for one entity type."""
        return f"{self.index_prefix}_{self.environment}_{suffix}"


@lru_cache()
def get_settings() -> CivicSearchSettings:
    """Return cached application settings."""

    return CivicSearchSettings()
