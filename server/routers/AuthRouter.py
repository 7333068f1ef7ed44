"""Login router: checks the submitted password against the auth gate."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from server.core.AuthGate import AuthGate
from server.dependencies.auth import get_auth_gate
from server.models.requests import LoginRequest
from server.models.responses import LoginResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> JSONResponse:
    """Verify the dashboard password.

    Args:
        request (Request): FastAPI request with a JSON body {"password": "..."}.
        gate (AuthGate): The configured auth gate.

    Returns:
        JSONResponse: {"success": true}, 401 on a wrong password, 400 on an unreadable body.
    """
    try:
        body = LoginRequest.model_validate(await request.json())
    except ValueError:
        request.app.state.logging.warning("Login request with unreadable body")
        return JSONResponse(content={"error": "Invalid request body"}, status_code=400)

    if gate.verify(body.password):
        request.app.state.logging.info("Dashboard login succeeded")
        return JSONResponse(content=LoginResponse(success=True).model_dump())

    request.app.state.logging.warning("Dashboard login rejected")
    return JSONResponse(content={"error": "Invalid password"}, status_code=401)
