"""Generic pagination models shared by every backend collection."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from shared.helper.pagination import total_pages_for

T = TypeVar("T")


class PageResult(BaseModel, Generic[T]):
    """
    Represents one page of a backend collection together with the overall counts
    needed to render pagination controls.
    """
    items: list[T] = []
    page: int = 1
    page_size: int = Field(default=10, ge=1)
    total_item_count: int = Field(default=0, ge=0)

    @property
    def total_page_count(self) -> int:
        return total_pages_for(self.total_item_count, self.page_size)
