from app.oauth.types import ProviderConfig

GOOGLE_PROVIDER_NAME = "google"

GOOGLE_AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_ENDPOINT = "https://www.googleapis.com/oauth2/v2/userinfo"
GOOGLE_DEFAULT_SCOPE = "openid profile email"


def google_provider_config(
    client_id: str, client_secret: str | None, redirect_uri: str
) -> ProviderConfig:
    """Google follows the default contract, PKCE included."""
    return ProviderConfig(
        name=GOOGLE_PROVIDER_NAME,
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri,
        authorization_endpoint=GOOGLE_AUTHORIZATION_ENDPOINT,
        token_endpoint=GOOGLE_TOKEN_ENDPOINT,
        userinfo_endpoint=GOOGLE_USERINFO_ENDPOINT,
        scope=GOOGLE_DEFAULT_SCOPE,
        supports_pkce=True,
    )
