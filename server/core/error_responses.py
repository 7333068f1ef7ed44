"""Translate backend failures into the JSON error bodies of the proxy routes."""

from fastapi.responses import JSONResponse

from shared.models.errors import BackendError, TimeoutFailure, ValidationFailure


def backend_error_response(error: BackendError) -> JSONResponse:
    """Map a BackendError to a JSONResponse of the form {"error": message}.

    ValidationFailure becomes 400, TimeoutFailure 408, everything else 500.
    """
    if isinstance(error, ValidationFailure):
        return JSONResponse(content={"error": error.message}, status_code=400)
    if isinstance(error, TimeoutFailure):
        return JSONResponse(content={"error": "Request timeout"}, status_code=408)
    return JSONResponse(content={"error": error.message}, status_code=500)
