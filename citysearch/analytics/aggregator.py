from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    """Summarise recorded ``search`` events for the analytics endpoint."""
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Criterion usage
    criterion_counter: Counter[str] = Counter()
    for s in searches:
        for name in s.get("criteria", []) or []:
            criterion_counter[name] += 1
    criteria_usage = {name: _rate(count, total) for name, count in criterion_counter.items()}

    # Top text terms, per text criterion
    term_counters: dict[str, Counter[str]] = defaultdict(Counter)
    for s in searches:
        for name, term in (s.get("text_terms") or {}).items():
            term_counters[name][term] += 1
    top_terms = {
        name: [{"term": t, "count": c} for t, c in counter.most_common(10)]
        for name, counter in term_counters.items()
    }

    zero_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "criteria_usage": criteria_usage,
        "top_text_terms": top_terms,
        "zero_result_rate": _rate(zero_results, total),
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": _rate(cache_hits, total),
        },
    }
