"""Declarative description of a dashboard table.

A TableSpec tells the backend client which endpoint and filters a collection
has, and tells the CSV export which columns to write in which order. One
RemoteCollectionViewModel serves every table through these descriptions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import BaseModel

from shared.helper.filters import sanitize_mobile


FILTER_KIND_TEXT = "text"
FILTER_KIND_MOBILE = "mobile"
FILTER_KIND_DATE = "date"


@dataclass(frozen=True)
class FilterSpec:
    key: str
    label: str
    kind: str = FILTER_KIND_TEXT

    def normalize(self, value: str | None) -> str:
        """Sanitise raw input for this filter. Never rejects, only cleans."""
        value = value or ""
        if self.kind == FILTER_KIND_MOBILE:
            return sanitize_mobile(value)
        return value


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str
    getter: Callable[[Any], Any] | None = None

    def value_of(self, item: Any) -> Any:
        """Read this column's value from a row (pydantic model or dict)."""
        if self.getter is not None:
            return self.getter(item)
        if isinstance(item, dict):
            return item.get(self.key)
        return getattr(item, self.key, None)


@dataclass(frozen=True)
class TableSpec:
    name: str
    title: str
    list_endpoint: str
    row_model: type[BaseModel]
    filters: list[FilterSpec] = field(default_factory=list)
    columns: list[ColumnSpec] = field(default_factory=list)
    delete_endpoint: str | None = None
    export_prefix: str | None = None

    def get_filter(self, key: str) -> FilterSpec | None:
        for spec in self.filters:
            if spec.key == key:
                return spec
        return None

    def get_filter_keys(self) -> list[str]:
        return [spec.key for spec in self.filters]

    def get_date_filter_keys(self) -> list[str]:
        return [spec.key for spec in self.filters if spec.kind == FILTER_KIND_DATE]

    def supports_delete(self) -> bool:
        return self.delete_endpoint is not None

    def get_export_filename(self, date_str: str) -> str:
        return f"{self.export_prefix or self.name}_{date_str}.csv"
