"""Error taxonomy for everything that talks to the earnings backend.

All failures raised by the backend clients derive from BackendError so that
routers and view models can recover them at a single boundary.
"""


class BackendError(Exception):
    """Base class for all backend related failures."""

    default_message = "Backend request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkFailure(BackendError):
    """The backend could not be reached (DNS, connection refused, reset, ...)."""

    default_message = "Network error while contacting the backend"


class HttpStatusFailure(BackendError):
    """The backend answered with a non-success status code."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        self.backend_message = message
        super().__init__(message or f"HTTP error! status: {status_code}")


class TimeoutFailure(BackendError):
    """A request with an explicit timeout policy was aborted."""

    default_message = "Request timed out"


class ValidationFailure(BackendError):
    """A query parameter was malformed before any request was sent."""

    default_message = "Invalid request parameter"


class ConflictFailure(BackendError):
    """The requested action is already in flight for the same target."""

    default_message = "Action already in progress"
