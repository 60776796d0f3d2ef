"""CivicSearch: aggregate civic-official records into a search index feed."""

__version__ = "1.1.0"
