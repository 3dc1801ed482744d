from app.schemas.auth import (
    HomeResponse,
    LogoutResponse,
    ProviderListResponse,
    SessionUserResponse,
    TokenInfoResponse,
)
from app.schemas.common import (
    ApiResponse,
    ErrorResponse,
    MetaResponse,
    create_error_response,
    create_success_response,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "HomeResponse",
    "LogoutResponse",
    "MetaResponse",
    "ProviderListResponse",
    "SessionUserResponse",
    "TokenInfoResponse",
    "create_error_response",
    "create_success_response",
]
