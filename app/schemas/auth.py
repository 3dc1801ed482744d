from datetime import datetime
from typing import Any

from pydantic import BaseModel

from app.sessions.models import SessionUser

TOKEN_PREVIEW_LENGTH = 20


def _preview(token: str | None) -> str | None:
    if not token:
        return None
    return f"{token[:TOKEN_PREVIEW_LENGTH]}..."


class ProviderListResponse(BaseModel):
    providers: list[str]


class TokenInfoResponse(BaseModel):
    access_token_preview: str
    refresh_token_preview: str | None = None
    token_type: str
    expires_in: int | None = None
    expires_at: datetime | None = None
    scope: str | None = None
    can_refresh: bool
    expired: bool


class SessionUserResponse(BaseModel):
    provider: str
    user_info: dict[str, Any]
    tokens: TokenInfoResponse

    @classmethod
    def from_session_user(cls, user: SessionUser) -> "SessionUserResponse":
        tokens = user.tokens
        return cls(
            provider=user.provider,
            user_info=user.user_info,
            tokens=TokenInfoResponse(
                access_token_preview=_preview(tokens.access_token),
                refresh_token_preview=_preview(tokens.refresh_token),
                token_type=tokens.token_type,
                expires_in=tokens.expires_in,
                expires_at=tokens.expires_at,
                scope=tokens.scope,
                can_refresh=tokens.can_refresh,
                expired=tokens.is_expired(),
            ),
        )


class HomeResponse(BaseModel):
    app_name: str
    providers: list[str]
    user: SessionUserResponse | None = None


class LogoutResponse(BaseModel):
    message: str
