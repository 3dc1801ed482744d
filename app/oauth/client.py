import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from urllib.parse import parse_qsl, urlencode

from app.constants.enums import GrantType, TokenResponseFormat
from app.oauth.exceptions import (
    MissingRefreshTokenError,
    ProviderRequestError,
    TokenExchangeError,
    TokenRefreshError,
    UserInfoError,
)
from app.oauth.pkce import CODE_CHALLENGE_METHOD, create_authorization_request_values
from app.oauth.transport import HttpMethod, HttpResponse, HttpTransport, TransportError
from app.oauth.types import AuthorizationRequest, ProviderConfig, TokenSet, UserInfo

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

ExchangeOverride = Callable[
    ["OAuth2Client", ProviderConfig, str, str | None], Awaitable[TokenSet]
]


class OAuth2Client:
    """Authorization Code + PKCE engine.

    Holds no per-login state: the caller keeps ``state`` and ``code_verifier``
    between :meth:`begin_authorization` and :meth:`exchange_code`. Providers
    whose token endpoint deviates from the default contract can be given an
    entry in ``exchange_overrides``, keyed by provider name.
    """

    def __init__(
        self,
        transport: HttpTransport,
        exchange_overrides: Mapping[str, ExchangeOverride] | None = None,
    ):
        if exchange_overrides is None:
            from app.oauth.providers import EXCHANGE_OVERRIDES

            exchange_overrides = EXCHANGE_OVERRIDES
        self._transport = transport
        self._exchange_overrides = dict(exchange_overrides)

    def begin_authorization(self, config: ProviderConfig) -> AuthorizationRequest:
        state, code_verifier, code_challenge = create_authorization_request_values()
        params = {
            "client_id": config.client_id,
            "redirect_uri": config.redirect_uri,
            "response_type": "code",
            "scope": config.scope,
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": CODE_CHALLENGE_METHOD,
        }
        for key, value in config.extra_authorization_params.items():
            params.setdefault(key, value)

        separator = "&" if "?" in config.authorization_endpoint else "?"
        redirect_url = f"{config.authorization_endpoint}{separator}{urlencode(params)}"
        logger.debug("Built authorization URL for provider: %s", config.name)
        return AuthorizationRequest(
            redirect_url=redirect_url,
            state=state,
            code_verifier=code_verifier,
            code_challenge=code_challenge,
        )

    async def exchange_code(
        self, config: ProviderConfig, code: str, code_verifier: str | None
    ) -> TokenSet:
        override = self._exchange_overrides.get(config.name)
        if override is not None:
            logger.debug("Using exchange override for provider: %s", config.name)
            return await override(self, config, code, code_verifier)
        return await self.default_exchange_code(config, code, code_verifier)

    async def default_exchange_code(
        self,
        config: ProviderConfig,
        code: str,
        code_verifier: str | None,
        send_code_verifier: bool | None = None,
    ) -> TokenSet:
        form = self.build_exchange_form(config, code, code_verifier, send_code_verifier)
        payload = await self.post_token_request(config, form, TokenExchangeError)
        tokens = self._to_token_set(config, payload, TokenExchangeError)
        logger.info("Token exchange successful for provider: %s", config.name)
        return tokens

    def build_exchange_form(
        self,
        config: ProviderConfig,
        code: str,
        code_verifier: str | None,
        send_code_verifier: bool | None = None,
    ) -> dict[str, str]:
        if send_code_verifier is None:
            send_code_verifier = config.supports_pkce

        form = {
            "grant_type": GrantType.AUTHORIZATION_CODE.value,
            "code": code,
            "redirect_uri": config.redirect_uri,
            "client_id": config.client_id,
        }
        if send_code_verifier and code_verifier:
            form["code_verifier"] = code_verifier
        if config.client_secret:
            form["client_secret"] = config.client_secret
        return form

    async def refresh_token(
        self, config: ProviderConfig, refresh_token: str | None
    ) -> TokenSet:
        if not refresh_token:
            raise MissingRefreshTokenError(config.name)

        form = {
            "grant_type": GrantType.REFRESH_TOKEN.value,
            "refresh_token": refresh_token,
            "client_id": config.client_id,
        }
        if config.client_secret:
            form["client_secret"] = config.client_secret

        payload = await self.post_token_request(config, form, TokenRefreshError)
        tokens = self._to_token_set(
            config, payload, TokenRefreshError, previous_refresh_token=refresh_token
        )
        logger.info("Token refresh successful for provider: %s", config.name)
        return tokens

    async def fetch_user_info(
        self, config: ProviderConfig, access_token: str
    ) -> UserInfo:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": JSON_CONTENT_TYPE,
        }
        response = await self._send(
            config, HttpMethod.GET, config.userinfo_endpoint, headers, None, UserInfoError
        )
        if not response.is_success:
            self._raise_for_response(config, response, UserInfoError)

        try:
            user_info = response.json()
        except ValueError as e:
            logger.warning(
                "Userinfo response from %s is not JSON: %s", config.name, response.text
            )
            raise UserInfoError(config.name, response.status_code, response.text) from e

        if not isinstance(user_info, dict):
            raise UserInfoError(config.name, response.status_code, response.text)

        logger.info("User info fetched successfully from provider: %s", config.name)
        return user_info

    async def post_token_request(
        self,
        config: ProviderConfig,
        form: dict[str, str],
        error_cls: type[ProviderRequestError],
    ) -> dict[str, Any]:
        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
        }
        headers.update(config.extra_token_headers)

        response = await self._send(
            config, HttpMethod.POST, config.token_endpoint, headers, form, error_cls
        )
        if not response.is_success:
            self._raise_for_response(config, response, error_cls)

        payload = self._decode_token_body(config, response)
        if payload is None:
            logger.warning(
                "Undecodable token response from %s: %s", config.name, response.text
            )
            raise error_cls(config.name, response.status_code, response.text)

        if payload.get("error"):
            logger.warning(
                "Token endpoint of %s returned error: %s (%s)",
                config.name,
                payload.get("error"),
                payload.get("error_description"),
            )
            raise error_cls(config.name, response.status_code, response.text)

        return payload

    async def _send(
        self,
        config: ProviderConfig,
        method: HttpMethod,
        url: str,
        headers: dict[str, str],
        data: dict[str, str] | None,
        error_cls: type[ProviderRequestError],
    ) -> HttpResponse:
        try:
            return await self._transport.request(method, url, headers=headers, data=data)
        except TransportError as e:
            logger.warning("Request to %s failed for provider %s: %s", url, config.name, e)
            raise error_cls(config.name, None, str(e)) from e

    def _raise_for_response(
        self,
        config: ProviderConfig,
        response: HttpResponse,
        error_cls: type[ProviderRequestError],
    ) -> None:
        logger.warning(
            "Provider %s responded with status %s: %s",
            config.name,
            response.status_code,
            response.text,
        )
        raise error_cls(config.name, response.status_code, response.text or None)

    def _decode_token_body(
        self, config: ProviderConfig, response: HttpResponse
    ) -> dict[str, Any] | None:
        content_type = response.content_type
        if "json" in content_type:
            use_json = True
        elif content_type == FORM_CONTENT_TYPE:
            use_json = False
        else:
            use_json = config.token_response_format == TokenResponseFormat.JSON

        if not use_json:
            return dict(parse_qsl(response.text, keep_blank_values=True))
        try:
            payload = response.json()
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

    def _to_token_set(
        self,
        config: ProviderConfig,
        payload: dict[str, Any],
        error_cls: type[ProviderRequestError],
        previous_refresh_token: str | None = None,
    ) -> TokenSet:
        if not payload.get("access_token"):
            logger.warning("Token response from %s has no access_token", config.name)
            raise error_cls(config.name, None, "missing access_token")
        try:
            return TokenSet.from_token_response(payload, previous_refresh_token)
        except (TypeError, ValueError) as e:
            logger.warning("Malformed token response from %s: %s", config.name, e)
            raise error_cls(config.name, None, str(e)) from e
