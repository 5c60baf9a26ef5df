"""Access-token session for the DebtEase API client.

A Session is created by the application's top-level owner and handed to the
client. Nothing here is global.
"""

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class Session:
    def __init__(self) -> None:
        self.token: str | None = None
        self.expires_at: datetime | None = None

    def start(self, token: str, expires_at: datetime | str | None = None) -> None:
        """Store a freshly issued token. ``expires_at`` may be an ISO string."""
        if isinstance(expires_at, str):
            expires_at = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
        if expires_at is not None and expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)

        self.token = token
        self.expires_at = expires_at
        logger.debug("Session started (expires %s)", expires_at)

    def clear(self) -> None:
        logger.debug("Session cleared")
        self.token = None
        self.expires_at = None

    def is_expired(self, now: datetime | None = None) -> bool:
        """True without a token. A token with no known expiry never expires."""
        if self.token is None:
            return True
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def has_valid_token(self) -> bool:
        return self.token is not None and not self.is_expired()

    def auth_headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
