import logging

from fastapi import APIRouter, Query, Response
from fastapi.responses import RedirectResponse

from app.core.dependencies import AuthServiceDep, SessionIdDep
from app.core.settings import settings
from app.oauth.exceptions import NotAuthenticatedError
from app.schemas.auth import LogoutResponse, ProviderListResponse, SessionUserResponse
from app.schemas.common import ApiResponse, create_success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, session_id: str) -> None:
    """Set the HTTP-only session cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.session_cookie_name, path="/")


@router.get(
    "/providers",
    response_model=ApiResponse[ProviderListResponse],
    summary="List configured providers",
)
async def list_providers(
    auth_service: AuthServiceDep,
) -> ApiResponse[ProviderListResponse]:
    return create_success_response(
        ProviderListResponse(providers=auth_service.list_providers())
    )


@router.get(
    "/me",
    response_model=ApiResponse[SessionUserResponse],
    summary="Get current session user",
)
async def get_current_user(
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> ApiResponse[SessionUserResponse]:
    user = await auth_service.current_user(session_id)
    if user is None:
        raise NotAuthenticatedError()
    return create_success_response(SessionUserResponse.from_session_user(user))


@router.post(
    "/refresh",
    response_model=ApiResponse[SessionUserResponse],
    summary="Refresh access token",
)
async def refresh_access_token(
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> ApiResponse[SessionUserResponse]:
    if not session_id:
        raise NotAuthenticatedError()
    user = await auth_service.refresh(session_id)
    return create_success_response(SessionUserResponse.from_session_user(user))


@router.post(
    "/logout",
    response_model=ApiResponse[LogoutResponse],
    summary="Logout",
)
async def logout(
    response: Response,
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> ApiResponse[LogoutResponse]:
    await auth_service.logout(session_id)
    _clear_session_cookie(response)
    return create_success_response(LogoutResponse(message="Logged out"))


@router.get("/{provider}/login", summary="Initiate OAuth login")
async def initiate_login(
    provider: str,
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
) -> RedirectResponse:
    login = await auth_service.start_login(session_id, provider)

    response = RedirectResponse(url=login.redirect_url)
    _set_session_cookie(response, login.session_id)
    return response


@router.get(
    "/{provider}/callback",
    summary="OAuth callback",
    description="Handles the provider redirect, stores tokens in the session and redirects home",
)
async def oauth_callback(
    provider: str,
    auth_service: AuthServiceDep,
    session_id: SessionIdDep,
    code: str | None = Query(None, description="Authorization code"),
    state: str | None = Query(None, description="State parameter for CSRF validation"),
    error: str | None = Query(None, description="Error returned by the provider"),
) -> RedirectResponse:
    result = await auth_service.handle_callback(
        session_id or "", provider, code=code, state=state, error=error
    )
    response = RedirectResponse(url="/", status_code=303)
    _set_session_cookie(response, result.session_id)
    return response
