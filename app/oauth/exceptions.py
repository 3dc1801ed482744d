from app.constants.auth_errors import AUTH_ERROR_MESSAGES, AuthErrorCode
from app.core.exceptions import AppException


class OAuthException(AppException):
    def __init__(
        self,
        error_code: AuthErrorCode,
        status_code: int = 400,
        message: str | None = None,
    ):
        self.error_code = error_code
        super().__init__(
            code=error_code.value,
            message=message or AUTH_ERROR_MESSAGES[error_code],
            status_code=status_code,
        )


class InvalidProviderError(OAuthException):
    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        super().__init__(AuthErrorCode.PROVIDER_NOT_FOUND, status_code=404)


class ProviderDeniedAccessError(OAuthException):
    def __init__(self, provider_name: str, error: str):
        self.provider_name = provider_name
        self.error = error
        super().__init__(
            AuthErrorCode.OAUTH_ACCESS_DENIED,
            message=AUTH_ERROR_MESSAGES[AuthErrorCode.OAUTH_ACCESS_DENIED].format(
                error=error
            ),
        )


class CsrfStateMismatchError(OAuthException):
    def __init__(self) -> None:
        super().__init__(AuthErrorCode.INVALID_OAUTH_STATE)


class ProviderRequestError(OAuthException):
    """A provider HTTP call failed.

    ``provider_error`` keeps the raw provider body for logs only; the
    user-facing message stays generic.
    """

    def __init__(
        self,
        error_code: AuthErrorCode,
        provider_name: str,
        status_code: int | None = None,
        provider_error: str | None = None,
    ):
        self.provider_name = provider_name
        self.upstream_status = status_code
        self.provider_error = provider_error
        super().__init__(error_code, status_code=502)


class TokenExchangeError(ProviderRequestError):
    def __init__(
        self,
        provider_name: str,
        status_code: int | None = None,
        provider_error: str | None = None,
    ):
        super().__init__(
            AuthErrorCode.OAUTH_TOKEN_EXCHANGE_FAILED,
            provider_name,
            status_code,
            provider_error,
        )


class TokenRefreshError(ProviderRequestError):
    def __init__(
        self,
        provider_name: str,
        status_code: int | None = None,
        provider_error: str | None = None,
    ):
        super().__init__(
            AuthErrorCode.OAUTH_TOKEN_REFRESH_FAILED,
            provider_name,
            status_code,
            provider_error,
        )


class UserInfoError(ProviderRequestError):
    def __init__(
        self,
        provider_name: str,
        status_code: int | None = None,
        provider_error: str | None = None,
    ):
        super().__init__(
            AuthErrorCode.OAUTH_USER_INFO_FAILED,
            provider_name,
            status_code,
            provider_error,
        )


class MissingRefreshTokenError(OAuthException):
    def __init__(self, provider_name: str | None = None):
        self.provider_name = provider_name
        super().__init__(AuthErrorCode.REFRESH_TOKEN_UNAVAILABLE)


class NotAuthenticatedError(OAuthException):
    def __init__(self) -> None:
        super().__init__(AuthErrorCode.NOT_AUTHENTICATED, status_code=401)
