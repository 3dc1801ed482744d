from app.constants.enums import GrantType, LoginState, TokenResponseFormat
from app.constants.auth_errors import AuthErrorCode, AUTH_ERROR_MESSAGES

__all__ = [
    "GrantType",
    "LoginState",
    "TokenResponseFormat",
    "AuthErrorCode",
    "AUTH_ERROR_MESSAGES",
]
