"""Password prompt in front of the holdings management dialog.

This is a convenience gate for the UI, not a security boundary. The secret is
deployment configuration that the browser-side app can read, and once a
session is open the mutation endpoints perform no further checks. Real
protection belongs to the database's own authorization rules.
"""

from portfolio_journal.errors import AuthenticationError, ConfigurationError
from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)


class AccessGate:
    def __init__(self, secret: str | None) -> None:
        self._secret = secret or None
        self._authenticated = False

    @property
    def configured(self) -> bool:
        return self._secret is not None

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    def submit(self, candidate: str) -> bool:
        if self._secret is None:
            logger.warning("access_gate_unconfigured")
            raise ConfigurationError("Management password is not configured")
        if candidate != self._secret:
            logger.info("access_gate_rejected")
            raise AuthenticationError("Incorrect password")
        # Stays open until the session ends; there is no expiry.
        self._authenticated = True
        logger.info("access_gate_opened")
        return True
