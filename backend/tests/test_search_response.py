"""Tests for the search response adapter."""

import pytest
from pydantic import ValidationError

from discovery.catalog.search_state import SearchState
from discovery.search.response import Document, FacetItem, PaginationInfo, SearchResponse
from tests.helpers.es import es_buckets, es_hit, es_search_response


class TestPaginationInfo:
    """Derived page counters."""

    @pytest.mark.parametrize(
        ("total", "page", "per_page", "expected"),
        [
            (30, 1, 10, (1, 2, None, 3)),
            (30, 2, 10, (2, 3, 1, 3)),
            (30, 3, 10, (3, None, 2, 3)),
            (31, 3, 10, (3, 4, 2, 4)),
            (0, 1, 10, (1, None, None, 1)),
            (5, 4, 10, (4, None, 3, 1)),
        ],
    )
    def test_from_counters(self, total, page, per_page, expected):
        info = PaginationInfo.from_counters(total, page, per_page)

        assert (info.current_page, info.next_page, info.prev_page, info.total_pages) == expected

    def test_offset(self):
        assert PaginationInfo.from_counters(100, 3, 25).offset == 50

    def test_negative_total_is_treated_as_empty(self):
        info = PaginationInfo.from_counters(-4, 1, 10)

        assert info.total_count == 0
        assert info.total_pages == 1


class TestDocument:
    """Field access on stored documents."""

    def test_from_es_hit_prefers_source_id(self):
        document = Document.from_es_hit({"_id": "es-1", "_source": {"id": "123", "title_tsim": "Book1"}})

        assert document.id == "123"
        assert document.fields == {"title_tsim": "Book1"}

    def test_from_es_hit_falls_back_to_hit_id(self):
        document = Document.from_es_hit({"_id": 789, "_source": {"title_tsim": "Map1"}})

        assert document.id == "789"

    def test_title_joins_multiple_values(self):
        document = Document(id="1", fields={"title_tsim": ["Moby Dick", "The Whale"]})

        assert document.title("title_tsim") == "Moby Dick, The Whale"

    def test_title_falls_back_to_id(self):
        assert Document(id="1", fields={}).title("title_tsim") == "1"

    def test_display_type_uses_first_value(self):
        document = Document(id="1", fields={"format": ["Book", "Online"]})

        assert document.display_type("format") == "Book"
        assert Document(id="2").display_type("format") is None

    def test_has(self):
        document = Document(id="1", fields={"a": "x", "b": [], "c": ""})

        assert document.has("a")
        assert document.has("id")
        assert not document.has("b")
        assert not document.has("c")
        assert not document.has("missing")


class TestFacetItem:
    def test_label_defaults_to_value(self):
        assert FacetItem(value=2001, hits=4).display_label == "2001"

    def test_negative_hits_rejected(self):
        with pytest.raises(ValidationError):
            FacetItem(value="Book", hits=-1)


class TestSearchResponseFromEs:
    """Adapting raw Elasticsearch payloads."""

    def test_documents_total_and_facets(self):
        raw = es_search_response(
            hits=[es_hit("123", title_tsim="Book1", format="Book"), es_hit("456", title_tsim="Article1")],
            total=42,
            aggregations={"format": es_buckets(("Book", 30), ("Article", 12)), "other": es_buckets(("x", 1))},
        )

        response = SearchResponse.from_es(raw, page=2, per_page=10, facet_fields=["format", "language_ssim"])

        assert [d.id for d in response.documents] == ["123", "456"]
        assert response.total == 42
        assert [f.name for f in response.facets] == ["format"]
        assert [(i.value, i.hits, i.label) for i in response.facets[0].items] == [
            ("Book", 30, "Book"),
            ("Article", 12, "Article"),
        ]
        pages = response.pagination()
        assert (pages.current_page, pages.next_page, pages.prev_page, pages.total_pages) == (2, 3, 1, 5)

    def test_legacy_integer_total(self):
        raw = {"hits": {"total": 7, "hits": []}}

        assert SearchResponse.from_es(raw, page=1, per_page=10).total == 7

    def test_missing_sections(self):
        response = SearchResponse.from_es({}, page=1, per_page=10, facet_fields=["format"])

        assert response.documents == ()
        assert response.facets == ()
        assert response.total == 0

    def test_date_bucket_uses_key_as_string(self):
        raw = es_search_response(
            aggregations={"pub_date_ssim": {"buckets": [{"key": 978307200000, "key_as_string": "2001", "doc_count": 3}]}}
        )

        item = SearchResponse.from_es(raw, page=1, per_page=10, facet_fields=["pub_date_ssim"]).facets[0].items[0]

        assert item.value == "2001"
        assert item.label == "2001"

    def test_float_bucket(self):
        raw = es_search_response(aggregations={"rating": {"buckets": [{"key": 4.5, "doc_count": 1}]}})

        item = SearchResponse.from_es(raw, page=1, per_page=10, facet_fields=["rating"]).facets[0].items[0]

        assert item.value == 4.5
        assert item.label == "4.5"

    def test_boolean_bucket(self):
        raw = es_search_response(
            aggregations={"online_b": {"buckets": [{"key": 1, "key_as_string": "true", "doc_count": 8}]}}
        )

        item = SearchResponse.from_es(raw, page=1, per_page=10, facet_fields=["online_b"]).facets[0].items[0]

        assert item.value == "true"
        assert item.hits == 8
        assert SearchState(filters={"online_b": ("true",)}).has_facet_value("online_b", item.value)
