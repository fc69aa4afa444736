"""Builders for raw Elasticsearch payloads used across tests."""

from typing import Any


def es_hit(document_id: str, **source: Any) -> dict[str, Any]:
    return {"_index": "test-catalog", "_id": document_id, "_score": 1.0, "_source": {"id": document_id, **source}}


def es_buckets(*pairs: tuple[Any, int]) -> dict[str, Any]:
    return {"buckets": [{"key": key, "doc_count": count} for key, count in pairs]}


def es_search_response(
    hits: list[dict[str, Any]] | None = None,
    total: int | None = None,
    aggregations: dict[str, Any] | None = None,
) -> dict[str, Any]:
    hits = hits or []
    response: dict[str, Any] = {
        "took": 3,
        "timed_out": False,
        "hits": {
            "total": {"value": len(hits) if total is None else total, "relation": "eq"},
            "max_score": 1.0,
            "hits": hits,
        },
    }
    if aggregations is not None:
        response["aggregations"] = aggregations
    return response


def es_get_response(document_id: str, **source: Any) -> dict[str, Any]:
    return {"_index": "test-catalog", "_id": document_id, "found": True, "_source": {"id": document_id, **source}}
