from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .search.cache import get_cache_stats
from .search.data_store import get_engine
from .search.errors import InvalidQuery
from .search.models import SearchRequest, SearchResponse
from .search.service import run_search

logger = logging.getLogger(__name__)

app = FastAPI(title="City Search API", version="1.0.0")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    engine = get_engine()
    return {
        "records": len(engine.records),
        "criteria": [
            {"name": c.name, "type": c.type.value, "weight": c.weight}
            for c in engine.registry
        ],
        "allowed_attributes": list(engine.allowed_attributes),
    }


@app.post("/search", response_model=SearchResponse)
def search(body: SearchRequest) -> SearchResponse:
    try:
        return run_search(body)
    except InvalidQuery as exc:
        logger.warning("Rejected search query: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
