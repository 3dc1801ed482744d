from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.constants.enums import TokenResponseFormat

UserInfo = dict[str, Any]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProviderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    client_id: str
    client_secret: str | None = None
    redirect_uri: str
    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    scope: str
    supports_pkce: bool = True
    token_response_format: TokenResponseFormat = TokenResponseFormat.JSON
    extra_token_headers: dict[str, str] = Field(default_factory=dict)
    extra_authorization_params: dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "name",
        "client_id",
        "redirect_uri",
        "authorization_endpoint",
        "token_endpoint",
        "userinfo_endpoint",
        "scope",
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("client_secret")
    @classmethod
    def _blank_secret_is_absent(cls, value: str | None) -> str | None:
        return value or None


class AuthorizationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    redirect_url: str
    state: str
    code_verifier: str
    code_challenge: str


class TokenSet(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "Bearer"
    scope: str | None = None
    id_token: str | None = None
    issued_at: datetime = Field(default_factory=_utcnow)

    @property
    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    @property
    def expires_at(self) -> datetime | None:
        if self.expires_in is None:
            return None
        return self.issued_at + timedelta(seconds=self.expires_in)

    def is_expired(self, leeway_seconds: int = 0) -> bool:
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return _utcnow() + timedelta(seconds=leeway_seconds) >= expires_at

    @classmethod
    def from_token_response(
        cls, payload: dict[str, Any], previous_refresh_token: str | None = None
    ) -> "TokenSet":
        """Build a TokenSet from a decoded token endpoint body.

        ``previous_refresh_token`` is kept when a refresh response does not
        rotate the refresh token.
        """
        expires_in = payload.get("expires_in")
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token") or previous_refresh_token,
            expires_in=int(expires_in) if expires_in not in (None, "") else None,
            token_type=payload.get("token_type") or "Bearer",
            scope=payload.get("scope"),
            id_token=payload.get("id_token"),
        )
