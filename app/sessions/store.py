import logging
import secrets
import time
from typing import Protocol

from app.sessions.models import SessionData

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(Protocol):
    async def get(self, session_id: str) -> SessionData | None: ...

    async def set(self, session_id: str, data: SessionData) -> None: ...

    async def destroy(self, session_id: str) -> None: ...


class InMemorySessionStore:
    """Process-local session store.

    Records are kept as serialized JSON so callers always work on their own
    copy. Expired records are dropped on access and swept on every write.
    """

    def __init__(self, max_age_seconds: int = 86400) -> None:
        self._max_age_seconds = max_age_seconds
        self._records: dict[str, tuple[float, str]] = {}

    async def get(self, session_id: str) -> SessionData | None:
        record = self._records.get(session_id)
        if record is None:
            return None
        expires_at, payload = record
        if expires_at <= time.monotonic():
            logger.debug("Session expired, dropping record")
            self._records.pop(session_id, None)
            return None
        return SessionData.model_validate_json(payload)

    async def set(self, session_id: str, data: SessionData) -> None:
        now = time.monotonic()
        self._purge_expired(now)
        self._records[session_id] = (now + self._max_age_seconds, data.model_dump_json())

    async def destroy(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._records.items() if expires_at <= now]
        for key in expired:
            del self._records[key]
        if expired:
            logger.debug("Purged %d expired sessions", len(expired))

    def __len__(self) -> int:
        return len(self._records)
