"""JSON:API-style documents for catalog listings.

Builds plain dicts; the endpoints hand them to ``JSONResponse``. Every
function here is pure: inputs are never mutated and URLs come from the
``CatalogUrls`` passed in.
"""

from typing import Any

from discovery.catalog.search_state import SearchState
from discovery.catalog.urls import CatalogUrls
from discovery.presenters.json_presenter import JsonPresenter
from discovery.search.response import FacetField, FacetItem, FacetPage, PaginationInfo


def facet_item_links(
    facet_name: str,
    item: FacetItem,
    state: SearchState,
    urls: CatalogUrls,
) -> dict[str, str]:
    """``remove`` for a selected value, ``apply`` otherwise; never both."""
    if state.has_facet_value(facet_name, item.value):
        return {"remove": urls.search_action_url(state.remove_facet_value(facet_name, item.value))}
    return {"apply": urls.search_action_url(state.add_facet_value(facet_name, item.value))}


def serialize_facet_item(
    facet_name: str,
    item: FacetItem,
    state: SearchState,
    urls: CatalogUrls,
) -> dict[str, Any]:
    return {
        "attributes": {
            "value": item.value,
            "hits": item.hits,
            "label": item.display_label,
        },
        "links": facet_item_links(facet_name, item, state, urls),
    }


def serialize_facet(
    facet: FacetField,
    label: str,
    state: SearchState,
    urls: CatalogUrls,
) -> dict[str, Any]:
    return {
        "type": "facet",
        "id": facet.name,
        "attributes": {
            "label": label,
            "items": [serialize_facet_item(facet.name, item, state, urls) for item in facet.items],
        },
        "links": {"self": urls.facet_url(facet.name, state)},
    }


def pagination_links(pages: PaginationInfo, state: SearchState, urls: CatalogUrls) -> dict[str, str]:
    links = {"self": urls.listing_url(state)}
    if pages.next_page is not None:
        links["next"] = urls.page_url(state, pages.next_page)
    links["last"] = urls.page_url(state, pages.total_pages)
    return links


def pagination_meta(pages: PaginationInfo) -> dict[str, int | None]:
    return {
        "current_page": pages.current_page,
        "next_page": pages.next_page,
        "prev_page": pages.prev_page,
    }


def render_index_json(presenter: JsonPresenter, state: SearchState, urls: CatalogUrls) -> dict[str, Any]:
    """The search results document: ``data``, ``included``, ``links`` and ``meta``."""
    pages = presenter.pagination_info()

    data = [
        {
            "id": document.id,
            "type": presenter.document_type(document),
            "attributes": presenter.document_attributes(document),
            "links": {"self": urls.document_url(document.id)},
        }
        for document in presenter.documents
    ]

    included = [
        serialize_facet(facet, presenter.facet_label(facet.name), state, urls)
        for facet in presenter.search_facets()
        if presenter.config.facet_configuration_for_field(facet.name) is not None
    ]

    return {
        "data": data,
        "included": included,
        "links": pagination_links(pages, state, urls),
        "meta": {"pages": pagination_meta(pages)},
    }


def render_facet_json(facet_page: FacetPage, state: SearchState, urls: CatalogUrls) -> dict[str, Any]:
    """One page of a facet's values, with paging links over ``facet.page``."""
    facet = facet_page.facet
    self_url = urls.facet_url(facet.name, state)

    def page_link(page: int) -> str:
        separator = "&" if "?" in self_url else "?"
        return f"{self_url}{separator}facet.page={page}&facet.sort={facet_page.sort}"

    links = {"self": page_link(facet_page.page)}
    if facet_page.prev_page is not None:
        links["prev"] = page_link(facet_page.prev_page)
    if facet_page.next_page is not None:
        links["next"] = page_link(facet_page.next_page)

    return {
        "data": serialize_facet(facet, facet.label or facet.name, state, urls),
        "links": links,
        "meta": {
            "pages": {
                "current_page": facet_page.page,
                "next_page": facet_page.next_page,
                "prev_page": facet_page.prev_page,
                "per_page": facet_page.per_page,
            },
            "sort": facet_page.sort,
        },
    }
