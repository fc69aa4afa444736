"""Property-based tests for the search results document."""

from hypothesis import given, settings, strategies as st

from discovery.catalog.config import CatalogConfig
from discovery.catalog.search_state import SearchState
from discovery.catalog.urls import CatalogUrls
from discovery.presenters.json_presenter import JsonPresenter
from discovery.search.response import Document, FacetField, FacetItem, PaginationInfo, SearchResponse
from discovery.views.json_api import render_index_json

URLS = CatalogUrls(base_url="http://test.host")

facet_values = st.text(alphabet="abcdefghij", min_size=1, max_size=4)


def _config() -> CatalogConfig:
    config = CatalogConfig.build(title_field="title_tsim", display_type_field="format")
    config.add_facet_field("format", label="Format")
    return config


@settings(max_examples=200, deadline=None)
@given(
    total=st.integers(min_value=0, max_value=10_000),
    page=st.integers(min_value=1, max_value=600),
    per_page=st.integers(min_value=1, max_value=100),
)
def test_pagination_counters(total: int, page: int, per_page: int) -> None:
    """
    Property: page counters agree with one another.

    Invariants:
    - total_pages >= 1
    - next_page present iff current_page < total_pages
    - prev_page present iff current_page > 1
    """
    info = PaginationInfo.from_counters(total, page, per_page)

    assert info.total_pages >= 1
    assert (info.total_pages - 1) * per_page < max(total, 1) <= info.total_pages * per_page
    assert (info.next_page is not None) == (page < info.total_pages)
    assert (info.prev_page is not None) == (page > 1)


@settings(max_examples=100, deadline=None)
@given(
    total=st.integers(min_value=0, max_value=500),
    page=st.integers(min_value=1, max_value=60),
    ids=st.lists(st.text(alphabet="0123456789", min_size=1, max_size=6), max_size=10, unique=True),
)
def test_listing_links_and_data(total: int, page: int, ids: list[str]) -> None:
    """
    Property: the listing document mirrors the response.

    Invariants:
    - one data entry per document, in order
    - links.last always points at total_pages
    - links.next present iff meta next_page is not null
    """
    documents = tuple(Document(id=i, fields={"title_tsim": f"T{i}"}) for i in ids)
    response = SearchResponse(documents=documents, total=total, page=page, per_page=10)
    state = SearchState(page=page)

    rendered = render_index_json(JsonPresenter(response, _config()), state, URLS)

    assert [entry["id"] for entry in rendered["data"]] == ids
    assert rendered["links"]["last"] == URLS.page_url(state, response.pagination().total_pages)
    assert ("next" in rendered["links"]) == (rendered["meta"]["pages"]["next_page"] is not None)


@settings(max_examples=100, deadline=None)
@given(
    values=st.lists(facet_values, min_size=1, max_size=8, unique=True),
    selected=st.lists(facet_values, max_size=4),
)
def test_facet_item_links_are_exclusive(values: list[str], selected: list[str]) -> None:
    """
    Property: each facet item has exactly one of remove (selected) or apply (not selected).
    """
    items = tuple(FacetItem(value=value, hits=1) for value in values)
    response = SearchResponse(facets=(FacetField(name="format", items=items),), total=len(values))
    state = SearchState(filters={"format": tuple(selected)} if selected else {})

    rendered = render_index_json(JsonPresenter(response, _config()), state, URLS)

    for value, item in zip(values, rendered["included"][0]["attributes"]["items"]):
        links = item["links"]
        assert len(links) == 1
        if value in selected:
            assert "remove" in links
        else:
            assert "apply" in links


@given(
    filters=st.dictionaries(st.sampled_from(["format", "language_ssim"]), st.lists(facet_values, min_size=1, max_size=3), max_size=2),
    value=facet_values,
)
def test_add_then_remove_clears_selection(filters: dict[str, list[str]], value: str) -> None:
    state = SearchState(filters={name: tuple(values) for name, values in filters.items()}, page=4)

    added = state.add_facet_value("format", value)
    removed = added.remove_facet_value("format", value)

    assert added.has_facet_value("format", value)
    assert not removed.has_facet_value("format", value)
    assert added.page is None and removed.page is None
