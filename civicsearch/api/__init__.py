"""HTTP API exposing the CivicSearch feed."""

from .app import create_api_app

__all__ = ["create_api_app"]
