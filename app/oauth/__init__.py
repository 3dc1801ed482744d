from app.oauth.client import OAuth2Client
from app.oauth.registry import ProviderRegistry, build_provider_registry
from app.oauth.transport import AiohttpTransport, HttpResponse, HttpTransport
from app.oauth.types import AuthorizationRequest, ProviderConfig, TokenSet, UserInfo

__all__ = [
    "AiohttpTransport",
    "AuthorizationRequest",
    "HttpResponse",
    "HttpTransport",
    "OAuth2Client",
    "ProviderConfig",
    "ProviderRegistry",
    "TokenSet",
    "UserInfo",
    "build_provider_registry",
]
