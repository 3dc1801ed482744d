import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.logging import setup_logging
from app.core.settings import settings
from app.oauth.client import OAuth2Client
from app.oauth.registry import build_provider_registry
from app.oauth.transport import AiohttpTransport
from app.sessions.store import InMemorySessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(settings.log_level)
    logger.info("Application startup initiated")

    transport = AiohttpTransport(timeout=settings.http_timeout_seconds)
    app.state.provider_registry = build_provider_registry(settings)
    app.state.oauth_client = OAuth2Client(transport)
    app.state.session_store = InMemorySessionStore(settings.session_max_age_seconds)
    yield
    logger.info("Application shutdown initiated")
    await transport.close()
