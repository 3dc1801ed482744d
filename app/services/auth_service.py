import hmac
import logging
from dataclasses import dataclass

from app.oauth.client import OAuth2Client
from app.oauth.exceptions import (
    CsrfStateMismatchError,
    MissingRefreshTokenError,
    NotAuthenticatedError,
    ProviderDeniedAccessError,
    TokenExchangeError,
)
from app.oauth.registry import ProviderRegistry
from app.sessions.models import SessionData, SessionUser
from app.sessions.store import SessionStore, generate_session_id

logger = logging.getLogger(__name__)


@dataclass
class LoginRedirect:
    session_id: str
    redirect_url: str


@dataclass
class LoginResult:
    session_id: str
    user: SessionUser


class AuthService:
    """Drives one login attempt per session through the OAuth2 engine.

    The session record carries the attempt between requests:
    ``IDLE -> AWAITING_CALLBACK -> AUTHENTICATED``, back to ``IDLE`` on
    logout or failure.
    """

    def __init__(
        self,
        provider_registry: ProviderRegistry,
        oauth_client: OAuth2Client,
        session_store: SessionStore,
    ):
        self._provider_registry = provider_registry
        self._oauth_client = oauth_client
        self._session_store = session_store

    def list_providers(self) -> list[str]:
        return self._provider_registry.names()

    async def start_login(
        self, session_id: str | None, provider_name: str
    ) -> LoginRedirect:
        config = self._provider_registry.require(provider_name)
        authorization = self._oauth_client.begin_authorization(config)

        # only ids this server issued and still holds are reused
        session = await self._session_store.get(session_id) if session_id else None
        if session is None:
            session_id = generate_session_id()
            session = SessionData()

        # a new attempt ends any previous login on this session
        session.user = None
        session.oauth_state = authorization.state
        session.code_verifier = authorization.code_verifier
        session.provider = provider_name
        await self._session_store.set(session_id, session)

        logger.info("Started login with provider: %s", provider_name)
        return LoginRedirect(session_id=session_id, redirect_url=authorization.redirect_url)

    async def handle_callback(
        self,
        session_id: str,
        provider_name: str,
        code: str | None,
        state: str | None,
        error: str | None = None,
    ) -> LoginResult:
        config = self._provider_registry.require(provider_name)

        session = await self._session_store.get(session_id) or SessionData()
        expected_state = session.oauth_state
        code_verifier = session.code_verifier
        pending_provider = session.provider

        # pending values are single use
        if expected_state is not None:
            session.clear_pending_authorization()
            await self._session_store.set(session_id, session)

        if error:
            logger.warning("Provider %s denied access: %s", provider_name, error)
            raise ProviderDeniedAccessError(provider_name, error)

        if (
            not state
            or not expected_state
            or pending_provider != provider_name
            or not hmac.compare_digest(state.encode(), expected_state.encode())
        ):
            logger.warning("OAuth state mismatch on callback from %s", provider_name)
            raise CsrfStateMismatchError()

        if not code:
            logger.warning("Callback from %s carried no authorization code", provider_name)
            raise TokenExchangeError(provider_name, provider_error="missing code")

        tokens = await self._oauth_client.exchange_code(config, code, code_verifier)
        user_info = await self._oauth_client.fetch_user_info(config, tokens.access_token)

        user = SessionUser(provider=provider_name, tokens=tokens, user_info=user_info)
        session.user = user

        # authenticated sessions always get a fresh id
        new_session_id = generate_session_id()
        await self._session_store.set(new_session_id, session)
        await self._session_store.destroy(session_id)

        logger.info("User authenticated with provider: %s", provider_name)
        return LoginResult(session_id=new_session_id, user=user)

    async def refresh(self, session_id: str) -> SessionUser:
        session = await self._session_store.get(session_id)
        if session is None or session.user is None:
            raise NotAuthenticatedError()

        user = session.user
        if not user.tokens.can_refresh:
            logger.info("No refresh token stored for provider: %s", user.provider)
            raise MissingRefreshTokenError(user.provider)

        config = self._provider_registry.require(user.provider)
        # a failed refresh propagates and leaves the stored session untouched
        tokens = await self._oauth_client.refresh_token(config, user.tokens.refresh_token)

        session.user = user.model_copy(update={"tokens": tokens})
        await self._session_store.set(session_id, session)

        logger.info("Refreshed tokens for provider: %s", user.provider)
        return session.user

    async def current_user(self, session_id: str | None) -> SessionUser | None:
        if not session_id:
            return None
        session = await self._session_store.get(session_id)
        if session is None:
            return None
        return session.user

    async def logout(self, session_id: str | None) -> None:
        if not session_id:
            return
        await self._session_store.destroy(session_id)
        logger.info("Session destroyed on logout")
