"""Analytics router: aggregated earnings statistics for the summary views."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from server.core.error_responses import backend_error_response
from shared.models.errors import BackendError

router = APIRouter(prefix="/api/weekly-earnings-analytics", tags=["analytics"])


@router.get("/general-aggregations")
async def general_aggregations(request: Request) -> JSONResponse:
    """Platform-wide totals (revalidated every ANALYTICS_CACHE_TTL seconds)."""
    try:
        result = await request.app.state.analytics_service.do_get_general_aggregations()
    except BackendError as e:
        request.app.state.logging.error("Error fetching general aggregations: %s", e.message)
        return backend_error_response(e)
    return JSONResponse(content=result.model_dump())


@router.get("/work-area-wise")
async def work_area_wise(request: Request, start_date: str | None = None, end_date: str | None = None) -> JSONResponse:
    """Earnings per work area, optionally limited to a YYYY-MM-DD date range."""
    try:
        areas = await request.app.state.analytics_service.do_get_work_area_wise(start_date=start_date, end_date=end_date)
    except BackendError as e:
        request.app.state.logging.error("Error fetching work area analytics: %s", e.message)
        return backend_error_response(e)
    return JSONResponse(content=[area.model_dump() for area in areas])
