"""
Run the reference searches against the bundled dataset.

Usage:
    python -m citysearch.search.demo
"""
from __future__ import annotations

import logging
from pprint import pprint
from typing import Any

from .data_store import get_engine

DEMO_QUERIES: dict[str, dict[str, Any]] = {
    "london": {
        "name": "Londo",
        "distance": {"latitude": 43.70011, "longitude": -79.4163},
    },
    # Montreal airport
    "montreal": {
        "name": "Mont",
        "distance": {"latitude": 45.5467131, "longitude": -73.8779451},
    },
}


def run_demo() -> dict[str, list[dict[str, Any]]]:
    engine = get_engine()
    return {label: engine.compute_search(query) for label, query in DEMO_QUERIES.items()}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    for label, results in run_demo().items():
        print(f"== {label}")
        pprint(results)
