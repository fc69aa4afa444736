"""URL builders for catalog links.

Every builder works from an explicit base URL so views and the JSON
assembler never read request state themselves.
"""

from dataclasses import dataclass
from urllib.parse import quote

from fastapi import Request

from discovery.catalog.search_state import SearchState


def _with_query(url: str, query: str) -> str:
    return f"{url}?{query}" if query else url


@dataclass(frozen=True)
class CatalogUrls:
    """Absolute URLs for the listing, documents and facets of one catalog."""

    base_url: str
    listing_path: str = "/catalog"
    document_path: str = "/catalog"
    facet_path: str = "/catalog/facet"

    @classmethod
    def from_request(cls, request: Request, prefix: str = "") -> "CatalogUrls":
        base = str(request.base_url).rstrip("/") + prefix.rstrip("/")
        return cls(
            base_url=base,
            listing_path="/catalog",
            document_path="/catalog",
            facet_path="/catalog/facet",
        )

    def listing_url(self, state: SearchState) -> str:
        return _with_query(self.base_url + self.listing_path, state.query_string())

    def search_action_url(self, state: SearchState) -> str:
        """Where a search form or facet link submits ``state``."""
        return self.listing_url(state)

    def page_url(self, state: SearchState, page: int) -> str:
        return self.listing_url(state.with_page(page))

    def document_url(self, document_id: str) -> str:
        return f"{self.base_url}{self.document_path}/{quote(str(document_id), safe='')}"

    def email_url(self, document_id: str) -> str:
        return f"{self.document_url(document_id)}/email"

    def facet_url(self, facet_field: str, state: SearchState | None = None) -> str:
        url = f"{self.base_url}{self.facet_path}/{quote(facet_field, safe='')}"
        if state is None:
            return url
        return _with_query(url, state.with_page(None).query_string())
