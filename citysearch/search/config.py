from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..data_ingestion.config import DEFAULT_INGESTION_CONFIG

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _default_criteria() -> dict[str, dict[str, Any]]:
    return {
        "name": {
            "type": "text",
            "weight": 0.6,
            "config": {"secondary_search_malus": 0.1},
        },
        "distance": {
            "type": "distance",
            "weight": 0.8,
            "config": {"latitude_attr": "lat", "longitude_attr": "long", "limit_km": 1000},
        },
    }


@dataclass(frozen=True)
class SearchConfig:
    data_path: Path = Path(
        os.getenv("CITYSEARCH_DATA_PATH", str(DEFAULT_INGESTION_CONFIG.data_path))
    )
    score_min: float = float(os.getenv("CITYSEARCH_SCORE_MIN", "0.3"))
    limit: int = int(os.getenv("CITYSEARCH_LIMIT", "15"))
    criteria: dict[str, dict[str, Any]] = field(default_factory=_default_criteria)
    allowed_attributes: tuple[str, ...] = (
        "name",
        "id",
        "distance",
        "distance_label",
        "latitude",
        "longitude",
        "score",
    )


DEFAULT_SEARCH_CONFIG = SearchConfig()
