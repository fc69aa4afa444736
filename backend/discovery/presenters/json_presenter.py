"""Presenter for JSON search result listings."""

from discovery.catalog.config import CatalogConfig
from discovery.search.response import Document, FacetField, PaginationInfo, SearchResponse


class JsonPresenter:
    """Read-only view over a search response for the JSON listing."""

    def __init__(self, response: SearchResponse, config: CatalogConfig):
        self.response = response
        self.config = config

    @property
    def documents(self) -> tuple[Document, ...]:
        return self.response.documents

    def pagination_info(self) -> PaginationInfo:
        return self.response.pagination()

    def search_facets(self) -> list[FacetField]:
        """Configured facets present in the response, in configuration order."""
        facets = []
        for facet_config in self.config.facet_fields:
            facet = self.response.facet_by_field_name(facet_config.field)
            if facet is not None:
                facets.append(facet)
        return facets

    def facet_label(self, facet_field: str) -> str:
        return self.config.facet_field_label(facet_field)

    def document_title(self, document: Document) -> str:
        return document.title(self.config.index.title_field)

    def document_type(self, document: Document) -> str | None:
        return document.display_type(self.config.index.display_type_field)

    def document_attributes(self, document: Document) -> dict[str, object]:
        """Title plus each configured index field present on the document."""
        attributes: dict[str, object] = {"title": self.document_title(document)}
        for field in self.config.index.fields:
            if document.has(field.field):
                attributes[field.field] = document.get(field.field)
        return attributes
