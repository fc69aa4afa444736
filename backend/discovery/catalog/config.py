"""Catalog display and search configuration.

Describes which index fields hold a document's title and display type,
which fields are faceted, searchable and sortable, and how More Like This
lookups are built. One instance is shared by the search service, the
presenters and the views.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from discovery.core.config import settings


def humanize_field(field: str) -> str:
    """Turn an index field name into a display label (``pub_date`` -> ``Pub date``)."""
    words = field.replace("_", " ").strip()
    return words[:1].upper() + words[1:]


class FieldConfig(BaseModel):
    """A document field rendered on listings or the show page."""

    field: str
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label or humanize_field(self.field)


class FacetFieldConfig(BaseModel):
    """A facetable field."""

    field: str
    label: str | None = None
    limit: int = Field(default=10, ge=1)
    sort: Literal["count", "index"] = "count"
    # Page size of the facet "more" listing
    more_limit: int = Field(default=20, ge=1)

    @property
    def display_label(self) -> str:
        return self.label or humanize_field(self.field)


class SearchFieldConfig(BaseModel):
    """A named search scope (``all_fields``, ``title``...) and the index fields it queries."""

    key: str
    label: str
    qf: list[str]


class SortFieldConfig(BaseModel):
    """A named sort option and the Elasticsearch sort clause it expands to."""

    key: str
    label: str
    sort: list[Any]


class DocumentViewConfig(BaseModel):
    title_field: str
    display_type_field: str
    fields: list[FieldConfig] = Field(default_factory=list)


class MoreLikeThisConfig(BaseModel):
    fields: list[str] = Field(default_factory=list)
    count: int = Field(default=5, ge=0)


class CatalogConfig(BaseModel):
    """Catalog configuration."""

    index: DocumentViewConfig
    show: DocumentViewConfig
    facet_fields: list[FacetFieldConfig] = Field(default_factory=list)
    search_fields: list[SearchFieldConfig] = Field(default_factory=list)
    sort_fields: list[SortFieldConfig] = Field(default_factory=list)
    more_like_this: MoreLikeThisConfig = Field(default_factory=MoreLikeThisConfig)
    default_per_page: int = Field(default=10, ge=1)
    max_per_page: int = Field(default=100, ge=1)

    @classmethod
    def build(
        cls,
        title_field: str = "title_tsim",
        display_type_field: str = "format",
        **kwargs: Any,
    ) -> "CatalogConfig":
        """Create a configuration whose index and show views share title/type fields."""
        return cls(
            index=DocumentViewConfig(title_field=title_field, display_type_field=display_type_field),
            show=DocumentViewConfig(title_field=title_field, display_type_field=display_type_field),
            **kwargs,
        )

    def add_facet_field(self, field: str, **options: Any) -> FacetFieldConfig:
        facet = FacetFieldConfig(field=field, **options)
        self.facet_fields = [f for f in self.facet_fields if f.field != field] + [facet]
        return facet

    def add_index_field(self, field: str, label: str | None = None) -> FieldConfig:
        config = FieldConfig(field=field, label=label)
        self.index.fields.append(config)
        return config

    def add_show_field(self, field: str, label: str | None = None) -> FieldConfig:
        config = FieldConfig(field=field, label=label)
        self.show.fields.append(config)
        return config

    def add_search_field(self, key: str, label: str, qf: list[str]) -> SearchFieldConfig:
        config = SearchFieldConfig(key=key, label=label, qf=qf)
        self.search_fields.append(config)
        return config

    def add_sort_field(self, key: str, label: str, sort: list[Any]) -> SortFieldConfig:
        config = SortFieldConfig(key=key, label=label, sort=sort)
        self.sort_fields.append(config)
        return config

    def facet_configuration_for_field(self, field: str) -> FacetFieldConfig | None:
        for facet in self.facet_fields:
            if facet.field == field:
                return facet
        return None

    def facet_field_label(self, field: str) -> str:
        facet = self.facet_configuration_for_field(field)
        return facet.display_label if facet else humanize_field(field)

    def search_field_for(self, key: str | None) -> SearchFieldConfig | None:
        """Return the search field for ``key``, or the first configured one."""
        if not self.search_fields:
            return None
        for search_field in self.search_fields:
            if search_field.key == key:
                return search_field
        return self.search_fields[0]

    def sort_field_for(self, key: str | None) -> SortFieldConfig | None:
        """Return the sort option for ``key``; ``None`` selects the first (default) option."""
        if not self.sort_fields:
            return None
        if key is None:
            return self.sort_fields[0]
        for sort_field in self.sort_fields:
            if sort_field.key == key:
                return sort_field
        return None


def default_catalog_config() -> CatalogConfig:
    """Catalog configuration used by the running application."""
    config = CatalogConfig.build(
        title_field=settings.CATALOG_TITLE_FIELD,
        display_type_field=settings.CATALOG_DISPLAY_TYPE_FIELD,
        default_per_page=settings.CATALOG_DEFAULT_PER_PAGE,
        max_per_page=settings.CATALOG_MAX_PER_PAGE,
        more_like_this=MoreLikeThisConfig(
            fields=[settings.CATALOG_TITLE_FIELD, "subject_ssim", "author_tsim"],
            count=settings.MORE_LIKE_THIS_COUNT,
        ),
    )

    config.add_facet_field("format", label="Format")
    config.add_facet_field("pub_date_ssim", label="Publication Year", sort="index")
    config.add_facet_field("subject_ssim", label="Topic", limit=20)
    config.add_facet_field("language_ssim", label="Language")

    config.add_show_field("author_tsim", label="Author")
    config.add_show_field("subject_ssim", label="Subjects")
    config.add_show_field("language_ssim", label="Language")
    config.add_show_field("published_ssim", label="Published")
    config.add_show_field("isbn_ssim", label="ISBN")

    config.add_search_field(
        "all_fields",
        label="All Fields",
        qf=[f"{settings.CATALOG_TITLE_FIELD}^3", "author_tsim^2", "subject_ssim", "all_text_timv"],
    )
    config.add_search_field("title", label="Title", qf=[settings.CATALOG_TITLE_FIELD])
    config.add_search_field("author", label="Author", qf=["author_tsim"])
    config.add_search_field("subject", label="Subject", qf=["subject_ssim"])

    config.add_sort_field("relevance", label="relevance", sort=["_score", {"pub_date_si": {"order": "desc"}}])
    config.add_sort_field("year_desc", label="year (newest)", sort=[{"pub_date_si": {"order": "desc"}}])
    config.add_sort_field("year_asc", label="year (oldest)", sort=[{"pub_date_si": {"order": "asc"}}])
    config.add_sort_field("title", label="title", sort=[{"title_si": {"order": "asc"}}])

    return config


_catalog_config: CatalogConfig | None = None


def get_catalog_config() -> CatalogConfig:
    """Get the process-wide catalog configuration."""
    global _catalog_config
    if _catalog_config is None:
        _catalog_config = default_catalog_config()
    return _catalog_config
