from typing import Any

from pydantic import BaseModel

from shared.clients.backend.models.Page import PageResult


class PageResponse(BaseModel):
    """Wire format of a proxied table page, as the dashboard frontend expects it."""

    data: list[dict[str, Any]]
    total: int
    page: int
    totalPages: int

    @classmethod
    def from_result(cls, result: PageResult) -> "PageResponse":
        return cls(
            data=[item.model_dump() for item in result.items],
            total=result.total_item_count,
            page=result.page,
            totalPages=result.total_page_count,
        )


class LoginResponse(BaseModel):
    success: bool
