from app.sessions.models import SessionData, SessionUser
from app.sessions.store import InMemorySessionStore, SessionStore, generate_session_id

__all__ = [
    "InMemorySessionStore",
    "SessionData",
    "SessionStore",
    "SessionUser",
    "generate_session_id",
]
