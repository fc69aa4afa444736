"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator
from unittest.mock import MagicMock

# Settings are read at import time; keep tests off any real cluster.
os.environ.setdefault("ENV", "test")
os.environ.setdefault("EMAIL_BACKEND", "console")

import pytest
from fastapi.testclient import TestClient

from discovery.catalog.config import CatalogConfig, MoreLikeThisConfig
from discovery.catalog.search_state import SearchState
from discovery.catalog.urls import CatalogUrls
from discovery.main import create_app
from discovery.search.es_client import reset_client
from discovery.search.response import Document, FacetField, FacetItem, SearchResponse
from discovery.search.service import CatalogSearchService, get_search_service
from discovery.services.email.service import reset_email_service


@pytest.fixture
def catalog_config() -> CatalogConfig:
    """Minimal catalog: title in ``title_tsim``, one ``format`` facet."""
    config = CatalogConfig.build(
        title_field="title_tsim",
        display_type_field="format",
        more_like_this=MoreLikeThisConfig(fields=["title_tsim", "subject_ssim"], count=3),
    )
    config.add_facet_field("format", label="Format")
    config.add_show_field("author_tsim", label="Author")
    config.add_search_field("all_fields", label="All Fields", qf=["title_tsim^3", "author_tsim"])
    config.add_search_field("title", label="Title", qf=["title_tsim"])
    config.add_sort_field("relevance", label="relevance", sort=["_score"])
    config.add_sort_field("title", label="title", sort=[{"title_si": {"order": "asc"}}])
    return config


@pytest.fixture
def docs() -> tuple[Document, ...]:
    return (
        Document(id="123", fields={"title_tsim": "Book1", "author_tsim": "Julie", "format": "Book"}),
        Document(id="456", fields={"title_tsim": "Article1", "author_tsim": "Rosie", "format": "Article"}),
    )


@pytest.fixture
def format_facet() -> FacetField:
    return FacetField(name="format", items=(FacetItem(value="Book", hits=30, label="Book"),), label="Format")


@pytest.fixture
def search_response(docs, format_facet) -> SearchResponse:
    """Page 1 of 3 (30 hits, 10 per page)."""
    return SearchResponse(documents=docs, facets=(format_facet,), total=30, page=1, per_page=10)


@pytest.fixture
def urls() -> CatalogUrls:
    return CatalogUrls(base_url="http://test.host", listing_path="/")


@pytest.fixture
def empty_state() -> SearchState:
    return SearchState()


@pytest.fixture
def es_client() -> MagicMock:
    client = MagicMock()
    client.ping.return_value = True
    return client


@pytest.fixture
def search_service(catalog_config, es_client) -> CatalogSearchService:
    return CatalogSearchService(config=catalog_config, index="test-catalog", client_getter=lambda: es_client)


@pytest.fixture
def client(search_service) -> Generator[TestClient, None, None]:
    """Test client whose search service talks to the mocked Elasticsearch client."""
    app = create_app()
    app.dependency_overrides[get_search_service] = lambda: search_service
    # No context manager: the lifespan would reconfigure root logging under caplog.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    reset_client()
    reset_email_service()
    yield
    reset_client()
    reset_email_service()
