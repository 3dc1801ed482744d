import logging
from typing import TYPE_CHECKING

from app.constants.enums import TokenResponseFormat
from app.oauth.types import ProviderConfig, TokenSet

if TYPE_CHECKING:
    from app.oauth.client import OAuth2Client

logger = logging.getLogger(__name__)

GITHUB_PROVIDER_NAME = "github"

GITHUB_AUTHORIZATION_ENDPOINT = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_ENDPOINT = "https://github.com/login/oauth/access_token"
GITHUB_USERINFO_ENDPOINT = "https://api.github.com/user"
GITHUB_DEFAULT_SCOPE = "read:user user:email"


def github_provider_config(
    client_id: str, client_secret: str | None, redirect_uri: str
) -> ProviderConfig:
    # Without the Accept header GitHub answers with a form-encoded body.
    return ProviderConfig(
        name=GITHUB_PROVIDER_NAME,
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        authorization_endpoint=GITHUB_AUTHORIZATION_ENDPOINT,
        token_endpoint=GITHUB_TOKEN_ENDPOINT,
        userinfo_endpoint=GITHUB_USERINFO_ENDPOINT,
        scope=GITHUB_DEFAULT_SCOPE,
        supports_pkce=False,
        token_response_format=TokenResponseFormat.FORM,
        extra_token_headers={"Accept": "application/json"},
    )


async def github_exchange_code(
    client: "OAuth2Client",
    config: ProviderConfig,
    code: str,
    code_verifier: str | None,
) -> TokenSet:
    """Exchange a code at GitHub's token endpoint.

    GitHub ignores PKCE, so the verifier is never sent regardless of the
    config. Granted scopes come back comma separated and are normalized to
    the space-delimited form used everywhere else.
    """
    tokens = await client.default_exchange_code(
        config, code, code_verifier, send_code_verifier=False
    )
    if tokens.scope and "," in tokens.scope:
        scopes = [scope.strip() for scope in tokens.scope.split(",") if scope.strip()]
        tokens = tokens.model_copy(update={"scope": " ".join(scopes)})
    logger.debug("GitHub granted scopes: %s", tokens.scope)
    return tokens
