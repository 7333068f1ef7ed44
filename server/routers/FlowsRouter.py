"""User records ("flows") router: proxies list and delete requests to the backend."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from server.core.error_responses import backend_error_response
from server.models.responses import PageResponse
from shared.models.errors import BackendError
from shared.tables.registry import USERS_TABLE

router = APIRouter(prefix="/api/flows", tags=["flows"])


@router.get("")
async def list_flows(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    store_location: str | None = None,
    mobile_number: str | None = None,
    work_area: str | None = None,
    start_date: str | None = None,
):
    """List one page of user records.

    Returns:
        PageResponse | JSONResponse: The page, or {"error": ...} with 400/408/500.
    """
    filters = {
        "store_location": store_location or "",
        "mobile_number": mobile_number or "",
        "work_area": work_area or "",
        "start_date": start_date or "",
    }
    try:
        result = await request.app.state.backend_client.do_fetch_page(USERS_TABLE, filters, page, limit)
    except BackendError as e:
        request.app.state.logging.error("Error fetching flows: %s", e.message)
        return backend_error_response(e)
    return PageResponse.from_result(result)


@router.delete("/{item_id}")
async def delete_flow(request: Request, item_id: str) -> JSONResponse:
    """Delete a single user record and return the backend's answer."""
    try:
        body = await request.app.state.backend_client.do_delete_item(USERS_TABLE, item_id)
    except BackendError as e:
        request.app.state.logging.error("Error deleting flow %s: %s", item_id, e.message)
        return backend_error_response(e)
    return JSONResponse(content=body)
