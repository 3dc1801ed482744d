from typing import Annotated

from fastapi import Cookie, Depends, Request

from app.core.settings import settings
from app.oauth.client import OAuth2Client
from app.oauth.registry import ProviderRegistry
from app.services.auth_service import AuthService
from app.sessions.store import SessionStore


def get_provider_registry(request: Request) -> ProviderRegistry:
    return request.app.state.provider_registry


def get_oauth_client(request: Request) -> OAuth2Client:
    return request.app.state.oauth_client


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_auth_service(
    provider_registry: ProviderRegistry = Depends(get_provider_registry),
    oauth_client: OAuth2Client = Depends(get_oauth_client),
    session_store: SessionStore = Depends(get_session_store),
) -> AuthService:
    return AuthService(
        provider_registry=provider_registry,
        oauth_client=oauth_client,
        session_store=session_store,
    )


def get_session_id(
    session_cookie: Annotated[
        str | None, Cookie(alias=settings.session_cookie_name)
    ] = None,
) -> str | None:
    return session_cookie or None


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SessionIdDep = Annotated[str | None, Depends(get_session_id)]
