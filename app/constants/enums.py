from enum import Enum


class TokenResponseFormat(str, Enum):
    JSON = "json"
    FORM = "form"


class GrantType(str, Enum):
    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"


class LoginState(str, Enum):
    IDLE = "idle"
    AWAITING_CALLBACK = "awaiting_callback"
    AUTHENTICATED = "authenticated"
