from enum import Enum


class AuthErrorCode(str, Enum):
    PROVIDER_NOT_FOUND = "PROVIDER_NOT_FOUND"

    OAUTH_ACCESS_DENIED = "OAUTH_ACCESS_DENIED"
    INVALID_OAUTH_STATE = "INVALID_OAUTH_STATE"
    OAUTH_TOKEN_EXCHANGE_FAILED = "OAUTH_TOKEN_EXCHANGE_FAILED"
    OAUTH_TOKEN_REFRESH_FAILED = "OAUTH_TOKEN_REFRESH_FAILED"
    OAUTH_USER_INFO_FAILED = "OAUTH_USER_INFO_FAILED"

    REFRESH_TOKEN_UNAVAILABLE = "REFRESH_TOKEN_UNAVAILABLE"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"


AUTH_ERROR_MESSAGES: dict[AuthErrorCode, str] = {
    AuthErrorCode.PROVIDER_NOT_FOUND: "OAuth provider not found or not configured.",
    AuthErrorCode.OAUTH_ACCESS_DENIED: "Authentication error: {error}",
    AuthErrorCode.INVALID_OAUTH_STATE: "Invalid state parameter. Please start the login again.",
    AuthErrorCode.OAUTH_TOKEN_EXCHANGE_FAILED: "Authentication failed. Please try again.",
    AuthErrorCode.OAUTH_TOKEN_REFRESH_FAILED: "Failed to refresh token.",
    AuthErrorCode.OAUTH_USER_INFO_FAILED: "Failed to fetch user information from provider.",
    AuthErrorCode.REFRESH_TOKEN_UNAVAILABLE: "No refresh token available.",
    AuthErrorCode.NOT_AUTHENTICATED: "Not authenticated.",
}
