from __future__ import annotations

from fastapi.testclient import TestClient

from citysearch.analytics.aggregator import compute_analytics
from citysearch.analytics.store import clear_events, get_events, record_event
from citysearch.app import app
from citysearch.search.cache import clear_cache

client = TestClient(app)

NEAR_TORONTO = {"latitude": 43.70011, "longitude": -79.4163}


def _reset():
    clear_events()
    clear_cache()


def test_analytics_returns_empty_initially():
    _reset()
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["zero_result_rate"] == 0.0


def test_analytics_tracks_search():
    _reset()
    client.post("/search", json={"query": {"name": "Londo", "distance": NEAR_TORONTO}})
    body = client.get("/analytics").json()

    assert body["total_searches"] == 1
    assert body["criteria_usage"] == {"name": 100.0, "distance": 100.0}
    assert body["top_text_terms"]["name"] == [{"term": "Londo", "count": 1}]


def test_analytics_tracks_multiple_searches():
    _reset()
    client.post("/search", json={"query": {"name": "Londo"}})
    client.post("/search", json={"query": {"name": "Mont", "distance": NEAR_TORONTO}})
    client.post("/search", json={"query": {"name": "Londo"}})
    body = client.get("/analytics").json()

    assert body["total_searches"] == 3
    assert body["criteria_usage"]["name"] == 100.0
    assert body["criteria_usage"]["distance"] == 33.3
    assert body["top_text_terms"]["name"][0] == {"term": "Londo", "count": 2}
    assert body["cache_stats"]["hits"] == 1


def test_analytics_zero_result_rate():
    _reset()
    client.post("/search", json={"query": {"name": "Londo"}})
    client.post("/search", json={"query": {"name": "Nonexistent12345"}})
    body = client.get("/analytics").json()
    assert body["zero_result_rate"] == 50.0


def test_rejected_queries_are_not_recorded():
    _reset()
    client.post("/search", json={"query": {}})
    assert get_events() == []


def test_compute_analytics_ignores_other_events():
    _reset()
    record_event("reload", {"records": 17})
    record_event("search", {"criteria": ["name"], "results_returned": 0, "response_time_ms": 2.0})

    summary = compute_analytics(get_events())

    assert summary["total_searches"] == 1
    assert summary["avg_response_time_ms"] == 2.0
    assert [e["records"] for e in get_events("reload")] == [17]
