from fastapi import HTTPException, Request

from server.core.AuthGate import AuthGate


async def get_auth_gate(request: Request) -> AuthGate:
    """Provide the auth gate configured at startup.

    Args:
        request (Request): The FastAPI request object (provides app.state).

    Raises:
        HTTPException: 503 if the application has no gate configured.
    """
    gate = getattr(request.app.state, "auth_gate", None)
    if gate is None:
        raise HTTPException(status_code=503, detail="Authentication is not configured")
    return gate
