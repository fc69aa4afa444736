"""Catalog search service backed by Elasticsearch."""

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError, BadRequestError, ConnectionError, NotFoundError, TransportError

from discovery.catalog.config import CatalogConfig, get_catalog_config
from discovery.catalog.search_state import SearchState
from discovery.core.app_exceptions import (
    document_not_found,
    facet_not_found,
    invalid_search_request,
    search_unavailable,
)
from discovery.core.config import settings
from discovery.search.es_client import get_es_client
from discovery.search.query import (
    build_catalog_search_query,
    build_facet_values_query,
    build_more_like_this_query,
    resolve_per_page,
)
from discovery.search.response import Document, FacetField, FacetPage, SearchResponse, facet_items_from_buckets

logger = logging.getLogger(__name__)

SEARCH_ERRORS = (ConnectionError, TransportError, ApiError)


def _body(response: Any) -> Mapping[str, Any]:
    """Plain dict body of a client response."""
    return getattr(response, "body", response)


class CatalogSearchService:
    """Runs catalog searches, document lookups, facet listings and More Like This."""

    def __init__(
        self,
        config: CatalogConfig,
        index: str | None = None,
        client_getter: Callable[[], Elasticsearch | None] = get_es_client,
    ):
        self.config = config
        self.index = index or settings.CATALOG_INDEX
        self._client_getter = client_getter

    def _client(self) -> Elasticsearch:
        client = self._client_getter()
        if client is None:
            reason = "elasticsearch_disabled" if not settings.ELASTICSEARCH_ENABLED else "elasticsearch_unreachable"
            logger.warning("Search client unavailable", extra={"reason": reason})
            raise search_unavailable(reason)
        return client

    def search(self, state: SearchState) -> SearchResponse:
        """Execute the search described by ``state``."""
        start_time = time.time()
        per_page = resolve_per_page(state, self.config)
        query_dsl = build_catalog_search_query(state, self.config)

        client = self._client()
        try:
            raw = _body(client.search(index=self.index, body=query_dsl))
        except BadRequestError as e:
            logger.warning(f"Elasticsearch rejected the query: {e}")
            raise invalid_search_request(str(e.message)) from e
        except SEARCH_ERRORS as e:
            logger.error(f"Elasticsearch search failed: {e}")
            raise search_unavailable("elasticsearch_error") from e

        response = SearchResponse.from_es(
            raw,
            page=state.current_page,
            per_page=per_page,
            facet_fields=[facet.field for facet in self.config.facet_fields],
        )

        query_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Catalog search: query_time_ms={query_time_ms}, total={response.total}, page={response.page}",
            extra={
                "search_q": state.q,
                "search_filters": {name: list(values) for name, values in state.filters.items()},
                "query_time_ms": query_time_ms,
                "total": response.total,
            },
        )
        return response

    def fetch_document(self, document_id: str) -> Document:
        client = self._client()
        try:
            hit = _body(client.get(index=self.index, id=document_id))
        except NotFoundError as e:
            raise document_not_found(document_id) from e
        except SEARCH_ERRORS as e:
            logger.error(f"Elasticsearch document fetch failed: {e}")
            raise search_unavailable("elasticsearch_error") from e

        if not hit.get("found", True):
            raise document_not_found(document_id)
        return Document.from_es_hit(hit)

    def facet_values(
        self,
        state: SearchState,
        facet_field: str,
        page: int = 1,
        sort: str | None = None,
    ) -> FacetPage:
        """One page of values for a configured facet, within the current search."""
        facet_config = self.config.facet_configuration_for_field(facet_field)
        if facet_config is None:
            raise facet_not_found(facet_field)

        page = max(1, page)
        query_dsl = build_facet_values_query(state, self.config, facet_config, page, sort)

        client = self._client()
        try:
            raw = _body(client.search(index=self.index, body=query_dsl))
        except BadRequestError as e:
            logger.warning(f"Elasticsearch rejected the query: {e}")
            raise invalid_search_request(str(e.message)) from e
        except SEARCH_ERRORS as e:
            logger.error(f"Elasticsearch facet query failed: {e}")
            raise search_unavailable("elasticsearch_error") from e

        buckets = (raw.get("aggregations") or {}).get(facet_field, {}).get("buckets", [])
        start = (page - 1) * facet_config.more_limit
        end = start + facet_config.more_limit
        items = facet_items_from_buckets(buckets[start:end])

        return FacetPage(
            facet=FacetField(name=facet_field, items=items, label=facet_config.display_label),
            page=page,
            per_page=facet_config.more_limit,
            has_next=len(buckets) > end,
            sort=sort or facet_config.sort,
        )

    def more_like_this(self, document_id: str) -> list[Document]:
        """
        Documents similar to ``document_id``.

        Never raises: the show page renders without the sidebar section
        when similar documents cannot be fetched.
        """
        mlt = self.config.more_like_this
        if mlt.count == 0 or not mlt.fields:
            return []

        client = self._client_getter()
        if client is None:
            return []

        query_dsl = build_more_like_this_query(document_id, self.index, mlt.fields, mlt.count)
        try:
            raw = _body(client.search(index=self.index, body=query_dsl))
        except Exception as e:
            logger.warning(f"More Like This lookup failed for {document_id}: {e}")
            return []

        hits = (raw.get("hits") or {}).get("hits", [])
        return [Document.from_es_hit(hit) for hit in hits]


def get_search_service() -> CatalogSearchService:
    """FastAPI dependency for the catalog search service."""
    return CatalogSearchService(config=get_catalog_config())
