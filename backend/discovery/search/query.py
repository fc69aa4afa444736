"""Query builders for catalog searches."""

from typing import Any

from discovery.catalog.config import CatalogConfig, FacetFieldConfig
from discovery.catalog.search_state import SearchState


def resolve_per_page(state: SearchState, config: CatalogConfig) -> int:
    """Requested page size, defaulted and capped by the catalog configuration."""
    per_page = state.per_page or config.default_per_page
    return min(per_page, config.max_per_page)


def _terms_aggregation(facet: FacetFieldConfig, size: int, sort: str | None = None) -> dict[str, Any]:
    order = {"_key": "asc"} if (sort or facet.sort) == "index" else {"_count": "desc"}
    return {"terms": {"field": facet.field, "size": size, "order": order}}


def build_filter_clauses(state: SearchState) -> list[dict[str, Any]]:
    """One ``terms`` clause per selected facet field (values within a field are OR'd)."""
    return [
        {"terms": {name: list(values)}}
        for name, values in state.filters.items()
        if values
    ]


def build_text_clause(state: SearchState, config: CatalogConfig) -> dict[str, Any]:
    if not state.q:
        return {"match_all": {}}

    search_field = config.search_field_for(state.search_field)
    if search_field is None:
        return {"simple_query_string": {"query": state.q, "default_operator": "and"}}

    return {
        "multi_match": {
            "query": state.q,
            "fields": search_field.qf,
            "type": "best_fields",
            "operator": "and",
        }
    }


def build_catalog_search_query(state: SearchState, config: CatalogConfig) -> dict[str, Any]:
    """
    Build Elasticsearch query DSL for a catalog search.

    Args:
        state: Current search state (query, facet filters, sort, paging)
        config: Catalog configuration (search, facet and sort fields)

    Returns:
        Elasticsearch query DSL dictionary. Unknown sort keys fall back to
        the default sort; validation of user input happens in the endpoint.
    """
    per_page = resolve_per_page(state, config)

    bool_query: dict[str, Any] = {"must": [build_text_clause(state, config)]}
    filter_clauses = build_filter_clauses(state)
    if filter_clauses:
        bool_query["filter"] = filter_clauses

    query: dict[str, Any] = {
        "query": {"bool": bool_query},
        "from": (state.current_page - 1) * per_page,
        "size": per_page,
        "track_total_hits": True,
    }

    sort_field = config.sort_field_for(state.sort) or config.sort_field_for(None)
    if sort_field is not None:
        query["sort"] = sort_field.sort

    if config.facet_fields:
        query["aggs"] = {
            facet.field: _terms_aggregation(facet, facet.limit)
            for facet in config.facet_fields
        }

    return query


def build_facet_values_query(
    state: SearchState,
    config: CatalogConfig,
    facet: FacetFieldConfig,
    page: int,
    sort: str | None = None,
) -> dict[str, Any]:
    """
    Build the query for one page of a facet's values.

    Terms aggregations cannot skip buckets, so this asks for every bucket up
    to the end of the requested page plus one; the extra bucket tells the
    caller whether another page exists.
    """
    size = page * facet.more_limit + 1
    bool_query: dict[str, Any] = {"must": [build_text_clause(state, config)]}
    filter_clauses = build_filter_clauses(state)
    if filter_clauses:
        bool_query["filter"] = filter_clauses

    return {
        "query": {"bool": bool_query},
        "size": 0,
        "aggs": {facet.field: _terms_aggregation(facet, size, sort)},
    }


def build_more_like_this_query(
    document_id: str,
    index: str,
    fields: list[str],
    count: int,
) -> dict[str, Any]:
    return {
        "query": {
            "more_like_this": {
                "fields": fields,
                "like": [{"_index": index, "_id": document_id}],
                "min_term_freq": 1,
                "min_doc_freq": 1,
                "max_query_terms": 12,
            }
        },
        "size": count,
    }
