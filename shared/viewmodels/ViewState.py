"""State of one dashboard table, owned by its RemoteCollectionViewModel."""

from dataclasses import dataclass, field
from typing import Any

from shared.models.errors import BackendError, TimeoutFailure


@dataclass
class ViewState:
    current_page: int = 1
    filters: dict[str, str] = field(default_factory=dict)
    items: list[Any] | None = None  # None until the first successful fetch
    total_pages: int = 1
    total_items: int = 0
    last_error: BackendError | None = None
    in_flight_delete_ids: list[str] = field(default_factory=list)
    pending_fetches: int = 0
    is_exporting: bool = False

    @property
    def in_flight_delete_id(self) -> str | None:
        """The most recently started delete that is still pending."""
        return self.in_flight_delete_ids[-1] if self.in_flight_delete_ids else None

    @property
    def is_loading(self) -> bool:
        return self.pending_fetches > 0

    @property
    def has_active_filters(self) -> bool:
        return any((value or "").strip() for value in self.filters.values())

    @property
    def error_message(self) -> str | None:
        return self.last_error.message if self.last_error else None

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.last_error, TimeoutFailure)
