from __future__ import annotations

import logging
import time
from typing import Any

from ..analytics.store import record_event
from .cache import cache_get, cache_set
from .data_store import get_engine
from .engine import RankingEngine
from .models import CriterionType, SearchRequest, SearchResponse

logger = logging.getLogger(__name__)


def _describe_query(engine: RankingEngine, query: dict[str, Any]) -> dict[str, Any]:
    applied = [c for c in engine.registry if query.get(c.name)]
    return {
        "criteria": [c.name for c in applied],
        "text_terms": {
            c.name: query[c.name]
            for c in applied
            if c.type is CriterionType.text and isinstance(query[c.name], str)
        },
    }


def run_search(request: SearchRequest, engine: RankingEngine | None = None) -> SearchResponse:
    """Serve one search: cache lookup, ranking, analytics.

    Raises ``InvalidQuery`` when the engine rejects the query; nothing is
    cached or recorded in that case.
    """
    start_time = time.time()
    engine = engine or get_engine()
    engine.validate_query(request.query)

    # --- Cache check ---
    # Engines hold different records, so the engine is part of the key.
    request_dict = {"engine": id(engine), **request.model_dump()}
    cached = cache_get(request_dict)
    cache_hit = cached is not None
    if cache_hit:
        results = cached
    else:
        results = engine.compute_search(request.query, request.score_min, request.limit)
        cache_set(request_dict, results)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        **_describe_query(engine, request.query),
        "score_min": request.score_min,
        "limit": request.limit,
        "results_returned": len(results),
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
    logger.debug("Search returned %d results in %.1f ms", len(results), elapsed_ms)

    return SearchResponse(
        results=results,
        total=len(results),
        response_time_ms=elapsed_ms,
        cache_hit=cache_hit,
    )
