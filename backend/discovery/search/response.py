"""Read interface over raw search-service responses.

``SearchResponse`` wraps an Elasticsearch search result and exposes the
matched documents, facet counts and pagination counters without leaking
the engine's payload shape to presenters or views.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FacetItem(BaseModel):
    """One value of a facet field with its hit count."""

    model_config = ConfigDict(frozen=True)

    value: str | int | float
    hits: int = Field(ge=0)
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else str(self.value)


class FacetField(BaseModel):
    """A facetable dimension and its values, in engine order."""

    model_config = ConfigDict(frozen=True)

    name: str
    items: tuple[FacetItem, ...] = ()
    label: str | None = None


class PaginationInfo(BaseModel):
    """Derived page counters for one result page."""

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(ge=1)
    next_page: int | None = None
    prev_page: int | None = None
    total_pages: int = Field(ge=1)
    total_count: int = Field(default=0, ge=0)
    per_page: int = Field(default=10, ge=1)

    @classmethod
    def from_counters(cls, total: int, page: int, per_page: int) -> "PaginationInfo":
        total = max(0, total)
        page = max(1, page)
        total_pages = max(1, math.ceil(total / per_page))
        return cls(
            current_page=page,
            next_page=page + 1 if page < total_pages else None,
            prev_page=page - 1 if page > 1 else None,
            total_pages=total_pages,
            total_count=total,
            per_page=per_page,
        )

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page


@dataclass(frozen=True)
class Document:
    """A stored catalog record: identifier plus its index fields."""

    id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_es_hit(cls, hit: Mapping[str, Any]) -> "Document":
        source = dict(hit.get("_source") or {})
        document_id = source.pop("id", None) or hit.get("_id")
        return cls(id=str(document_id), fields=source)

    def get(self, name: str, default: Any = None) -> Any:
        if name == "id":
            return self.id
        return self.fields.get(name, default)

    def first(self, name: str) -> Any:
        value = self.get(name)
        if isinstance(value, (list, tuple)):
            return value[0] if value else None
        return value

    def has(self, name: str) -> bool:
        value = self.get(name)
        return value is not None and value != [] and value != ""

    def text(self, name: str, separator: str = ", ") -> str | None:
        """Field value as display text; multiple values are joined."""
        value = self.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return separator.join(str(v) for v in value) or None
        return str(value)

    def title(self, title_field: str) -> str:
        return self.text(title_field) or self.id

    def display_type(self, display_type_field: str) -> str | None:
        value = self.first(display_type_field)
        return None if value is None else str(value)


@dataclass(frozen=True)
class FacetPage:
    """One page of a single facet's values (the facet "more" listing)."""

    facet: FacetField
    page: int
    per_page: int
    has_next: bool
    sort: str = "count"

    @property
    def prev_page(self) -> int | None:
        return self.page - 1 if self.page > 1 else None

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next else None


def _total_hits(hits: Mapping[str, Any]) -> int:
    total = hits.get("total", 0)
    if isinstance(total, Mapping):
        return int(total.get("value", 0))
    return int(total or 0)


def facet_items_from_buckets(buckets: Sequence[Mapping[str, Any]]) -> tuple[FacetItem, ...]:
    """Facet items from terms buckets.

    Date and boolean buckets are keyed by ``key_as_string`` (``"2001"``,
    ``"true"``), the form a selection carries in the query string.
    """
    items = []
    for bucket in buckets:
        value = bucket.get("key_as_string", bucket["key"])
        items.append(FacetItem(value=value, hits=bucket.get("doc_count", 0), label=str(value)))
    return tuple(items)


@dataclass(frozen=True)
class SearchResponse:
    """Documents, facets and counters of one executed search."""

    documents: tuple[Document, ...] = ()
    facets: tuple[FacetField, ...] = ()
    total: int = 0
    page: int = 1
    per_page: int = 10

    @classmethod
    def from_es(
        cls,
        raw: Mapping[str, Any],
        page: int,
        per_page: int,
        facet_fields: Sequence[str] = (),
    ) -> "SearchResponse":
        """Adapt an Elasticsearch response.

        Only aggregations named in ``facet_fields`` become facets, in that
        order; aggregations missing from the response are skipped.
        """
        hits = raw.get("hits") or {}
        documents = tuple(Document.from_es_hit(hit) for hit in hits.get("hits", []))

        aggs = raw.get("aggregations") or {}
        facets = []
        for name in facet_fields:
            if name not in aggs:
                continue
            facets.append(FacetField(name=name, items=facet_items_from_buckets(aggs[name].get("buckets", []))))

        return cls(
            documents=documents,
            facets=tuple(facets),
            total=_total_hits(hits),
            page=page,
            per_page=per_page,
        )

    def pagination(self) -> PaginationInfo:
        return PaginationInfo.from_counters(self.total, self.page, self.per_page)

    def facet_by_field_name(self, name: str) -> FacetField | None:
        for facet in self.facets:
            if facet.name == name:
                return facet
        return None
