"""Weekly earnings router: proxies filtered report listings to the backend."""

from fastapi import APIRouter, Query, Request

from server.core.error_responses import backend_error_response
from server.models.responses import PageResponse
from shared.models.errors import BackendError
from shared.tables.registry import EARNINGS_TABLE

router = APIRouter(prefix="/api/weekly-earnings", tags=["earnings"])


@router.get("")
async def list_weekly_earnings(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    work_area: str | None = None,
    mobile_number: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    primary_company: str | None = None,
):
    """List one page of weekly earnings reports with missing amounts normalised."""
    filters = {
        "work_area": work_area or "",
        "mobile_number": mobile_number or "",
        "start_date": start_date or "",
        "end_date": end_date or "",
        "primary_company": primary_company or "",
    }
    try:
        result = await request.app.state.backend_client.do_fetch_page(EARNINGS_TABLE, filters, page, limit)
    except BackendError as e:
        request.app.state.logging.error("Error fetching weekly earnings: %s", e.message)
        return backend_error_response(e)
    return PageResponse.from_result(result)
