from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    queries = [e for e in events if e["type"] == "recommendation"]
    total = len(queries)

    # Average response time
    times = [q["response_time_ms"] for q in queries if "response_time_ms" in q]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Queries that came back empty
    empty = sum(1 for q in queries if q.get("results_returned", 0) == 0)

    category_counter: Counter[str] = Counter(q.get("category", "all") for q in queries)
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]

    gender_usage = dict(Counter(q.get("gender", "all") for q in queries))
    strategy_usage = dict(Counter(q.get("strategy", "unknown") for q in queries))

    error_counter: Counter[str] = Counter()
    for q in queries:
        for kind in q.get("error_kinds", []) or []:
            error_counter[kind] += 1

    # Funnel averages: how much each stage narrows the catalog
    def _avg(key: str) -> float:
        values = [q[key] for q in queries if key in q]
        return round(sum(values) / len(values), 1) if values else 0.0

    return {
        "total_queries": total,
        "avg_response_time_ms": avg_time,
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "top_categories": top_categories,
        "gender_usage": gender_usage,
        "strategy_usage": strategy_usage,
        "errors": dict(error_counter),
        "funnel": {
            "catalog_size": _avg("catalog_size"),
            "after_category": _avg("after_category"),
            "after_gender": _avg("after_gender"),
            "results_returned": _avg("results_returned"),
        },
    }
