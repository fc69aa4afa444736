"""Search state parsed from catalog request parameters.

Facet selections use the ``f[field]=value`` convention (``f[field][]=value``
is accepted too). A state is immutable: adding or removing a facet value
returns a new state with the page reset, so generated links always land on
the first page of the new result set.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from urllib.parse import urlencode

_FACET_PARAM = re.compile(r"^f\[(?P<field>[^\[\]]+)\](\[\])?$")


def _to_positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


@dataclass(frozen=True)
class SearchState:
    """Immutable view of the user's current search."""

    q: str | None = None
    search_field: str | None = None
    filters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    sort: str | None = None
    page: int | None = None
    per_page: int | None = None

    @classmethod
    def from_query_params(cls, params: Iterable[tuple[str, str]] | Mapping[str, str]) -> "SearchState":
        """Build a state from request query parameters.

        ``params`` may be a starlette ``QueryParams`` (repeated keys are
        preserved through ``multi_items``), a plain mapping or a sequence of
        ``(key, value)`` pairs.
        """
        if hasattr(params, "multi_items"):
            items = params.multi_items()
        elif isinstance(params, Mapping):
            items = []
            for key, value in params.items():
                if isinstance(value, (list, tuple)):
                    items.extend((key, v) for v in value)
                else:
                    items.append((key, value))
        else:
            items = list(params)

        filters: dict[str, list[str]] = {}
        scalars: dict[str, str] = {}
        for key, value in items:
            match = _FACET_PARAM.match(key)
            if match:
                if value != "":
                    filters.setdefault(match.group("field"), []).append(value)
            else:
                scalars[key] = value

        q = scalars.get("q")
        return cls(
            q=q if q and q.strip() else None,
            search_field=scalars.get("search_field") or None,
            filters={name: tuple(values) for name, values in filters.items()},
            sort=scalars.get("sort") or None,
            page=_to_positive_int(scalars.get("page")),
            per_page=_to_positive_int(scalars.get("per_page")),
        )

    @property
    def current_page(self) -> int:
        return self.page or 1

    def filter_values(self, facet_field: str) -> tuple[str, ...]:
        return tuple(self.filters.get(facet_field, ()))

    def has_facet_value(self, facet_field: str, value: object) -> bool:
        """Whether ``value`` is selected for ``facet_field``.

        Comparison is exact on the string form; repeated selections count once.
        """
        return str(value) in self.filter_values(facet_field)

    def add_facet_value(self, facet_field: str, value: object) -> "SearchState":
        value = str(value)
        filters = dict(self.filters)
        current = filters.get(facet_field, ())
        if value not in current:
            filters[facet_field] = (*current, value)
        return replace(self, filters=filters, page=None)

    def remove_facet_value(self, facet_field: str, value: object) -> "SearchState":
        value = str(value)
        filters = dict(self.filters)
        remaining = tuple(v for v in filters.get(facet_field, ()) if v != value)
        if remaining:
            filters[facet_field] = remaining
        else:
            filters.pop(facet_field, None)
        return replace(self, filters=filters, page=None)

    def with_page(self, page: int | None) -> "SearchState":
        return replace(self, page=page)

    def has_constraints(self) -> bool:
        return bool(self.q or self.filters)

    def to_params(self) -> list[tuple[str, str]]:
        """Serialise back to ordered query parameters."""
        params: list[tuple[str, str]] = []
        if self.q:
            params.append(("q", self.q))
        if self.search_field:
            params.append(("search_field", self.search_field))
        for name, values in self.filters.items():
            params.extend((f"f[{name}]", v) for v in values)
        if self.sort:
            params.append(("sort", self.sort))
        if self.per_page:
            params.append(("per_page", str(self.per_page)))
        if self.page:
            params.append(("page", str(self.page)))
        return params

    def query_string(self) -> str:
        return urlencode(self.to_params())
