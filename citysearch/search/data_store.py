from __future__ import annotations

import logging
from dataclasses import replace

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG
from ..data_ingestion.ingest import load_records
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .engine import RankingEngine

logger = logging.getLogger(__name__)

_engine: RankingEngine | None = None


def build_engine(config: SearchConfig = DEFAULT_SEARCH_CONFIG) -> RankingEngine:
    """Load the configured dataset and wrap it in a ranking engine."""
    records = load_records(replace(DEFAULT_INGESTION_CONFIG, data_path=config.data_path))
    engine = RankingEngine(records, config.criteria, config.allowed_attributes)
    logger.info(
        "Search engine ready: %d records, criteria %s",
        len(engine.records), engine.registry.names,
    )
    return engine


def get_engine() -> RankingEngine:
    """Return the process-wide engine, building it on first call."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


def reset_engine() -> None:
    global _engine
    _engine = None
