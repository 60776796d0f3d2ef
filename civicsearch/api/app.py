"""FastAPI application for the CivicSearch feed."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from civicsearch.indexer.core import AggregationError, CivicIndexer

logger = logging.getLogger(__name__)


def create_api_app(indexer: Optional[CivicIndexer] = None) -> FastAPI:
    """Create a FastAPI app serving the aggregated civic-official feed."""
    app = FastAPI(title="CivicSearch API", version="1.1.0")

    def get_indexer() -> CivicIndexer:
        nonlocal indexer
        if indexer is None:
            indexer = CivicIndexer.from_settings()
        return indexer

    async def run_feed():
        try:
            return await get_indexer().fetch()
        except AggregationError as exc:
            logger.error("Feed aggregation failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc

    @app.get("/healthz")
    async def healthz() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    @app.get("/feed")
    async def feed() -> JSONResponse:
        """Return every index document plus the merged source diagnostics."""
        result = await run_feed()
        return JSONResponse(result.to_dict())

    @app.get("/feed/{identifier}")
    async def feed_document(identifier: str) -> JSONResponse:
        """Return a single document by its public identifier."""
        if get_indexer().builder.encoder.decode(identifier) is None:
            raise HTTPException(status_code=404, detail="Unknown identifier")

        result = await run_feed()
        for document in result.data:
            if document.identifier == identifier:
                return JSONResponse(document.to_dict())
        raise HTTPException(status_code=404, detail="Unknown identifier")

    return app


app = create_api_app()
