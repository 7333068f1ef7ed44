"""Static-secret gate guarding the dashboard login."""

import hmac

from shared.helper.HelperConfig import HelperConfig


class AuthGate:
    """Compares a submitted password with the single configured secret.

    The secret comes from DASHBOARD_PASSWORD and is held by this object only;
    the application passes the gate around explicitly (app.state.auth_gate).
    """

    def __init__(self, helper_config: HelperConfig, secret: str | None = None) -> None:
        self.logging = helper_config.get_logger()
        self._secret = secret if secret is not None else helper_config.get_string_val("DASHBOARD_PASSWORD")
        if not self._secret:
            raise ValueError("DASHBOARD_PASSWORD must not be empty.")

    def verify(self, password: str | None) -> bool:
        if not isinstance(password, str) or not password:
            return False
        return hmac.compare_digest(password.encode("utf-8"), self._secret.encode("utf-8"))
